import io

from mrtech import create_app
from mrtech.config import TestConfig
from mrtech.extensions import db
from mrtech.models import Product
from mrtech.services.auth import AuthConfig, AdminAuthenticator, SESSION_MAX_AGE_MS


def _set_cookie_headers(response):
    return [h for h in response.headers.getlist('Set-Cookie') if h.startswith('mrtech_admin=')]


def _add_product(app, **kwargs):
    fields = {'name': 'ThinkPad T480', 'category': 'REFURB', 'price_cents': 450000}
    fields.update(kwargs)
    with app.app_context():
        product = Product(**fields)
        db.session.add(product)
        db.session.commit()
        return product.id


def _product_count(app):
    with app.app_context():
        return Product.query.count()


# -----------------------------------------------------------------------------
# Login / logout
# -----------------------------------------------------------------------------

def test_login_sets_cookie(client):
    r = client.post('/api/admin/login', json={'password': 'hunter2'})
    assert r.status_code == 200
    assert r.get_json() == {'ok': True}

    [cookie] = _set_cookie_headers(r)
    assert cookie.startswith('mrtech_admin=admin.1700000000000.')
    assert 'HttpOnly' in cookie
    assert 'SameSite=Lax' in cookie
    assert 'Path=/' in cookie
    assert 'Max-Age=1209600' in cookie
    assert 'Secure' not in cookie


def test_login_accepts_form_body(client):
    r = client.post('/api/admin/login', data={'password': 'hunter2'})
    assert r.status_code == 200


def test_login_missing_password(client):
    r = client.post('/api/admin/login', json={})
    assert r.status_code == 400
    assert r.get_json() == {'ok': False, 'error': 'Missing password'}

    r = client.post('/api/admin/login', data='not json', content_type='application/json')
    assert r.status_code == 400


def test_login_wrong_password(client):
    r = client.post('/api/admin/login', json={'password': 'hunter3'})
    assert r.status_code == 401
    assert r.get_json() == {'ok': False, 'error': 'Invalid password'}
    assert _set_cookie_headers(r) == []


def test_login_without_signing_key_is_server_error():
    auth = AdminAuthenticator(AuthConfig(admin_password='hunter2', signing_key=None))
    app = create_app(TestConfig, authenticator=auth)

    r = app.test_client().post('/api/admin/login', json={'password': 'hunter2'})
    assert r.status_code == 500
    assert r.get_json() == {'ok': False, 'error': 'Server not configured'}
    assert _set_cookie_headers(r) == []


def test_login_without_admin_password_is_server_error():
    auth = AdminAuthenticator(AuthConfig(admin_password=None, signing_key='k1'))
    app = create_app(TestConfig, authenticator=auth)

    r = app.test_client().post('/api/admin/login', json={'password': 'hunter2'})
    assert r.status_code == 500
    assert r.get_json() == {'ok': False, 'error': 'Server not configured'}
    assert _set_cookie_headers(r) == []


def test_misconfiguration_is_not_reported_as_wrong_password():
    auth = AdminAuthenticator(AuthConfig(admin_password='hunter2', signing_key=None))
    app = create_app(TestConfig, authenticator=auth)

    r = app.test_client().post('/api/admin/login', json={'password': 'not-the-password'})
    assert r.status_code == 500
    assert r.get_json()['error'] == 'Server not configured'


def test_secure_cookie_in_production(clock):
    class ProdConfig(TestConfig):
        APP_ENV = 'production'

    auth = AdminAuthenticator(AuthConfig(admin_password='hunter2', signing_key='k1'), clock=clock)
    app = create_app(ProdConfig, authenticator=auth)

    r = app.test_client().post('/api/admin/login', json={'password': 'hunter2'})
    [cookie] = _set_cookie_headers(r)
    assert 'Secure' in cookie


def test_logout_clears_cookie(admin_client):
    assert admin_client.get('/api/admin/products').status_code == 200

    r = admin_client.post('/api/admin/logout')
    assert r.status_code == 200
    [cookie] = _set_cookie_headers(r)
    assert 'Max-Age=0' in cookie or 'Expires=Thu, 01 Jan 1970' in cookie

    assert admin_client.get('/api/admin/products').status_code == 401


# -----------------------------------------------------------------------------
# Authorization gate
# -----------------------------------------------------------------------------

def test_protected_endpoints_require_admin(client, app):
    product_id = _add_product(app)
    checks = [
        ('get', '/api/admin/products'),
        ('post', '/api/admin/products'),
        ('put', f'/api/admin/products/{product_id}'),
        ('delete', f'/api/admin/products/{product_id}'),
        ('post', '/api/admin/upload'),
    ]
    for method, url in checks:
        r = getattr(client, method)(url, json={'name': 'x', 'category': 'REFURB'})
        assert r.status_code == 401, url
        assert r.get_json() == {'ok': False, 'error': 'Unauthorized'}

    # Nothing was touched
    assert _product_count(app) == 1


def test_forged_cookie_rejected(raw_client, app):
    token = app.extensions['admin_auth'].issue_token()
    forged = token[:-1] + ('0' if token[-1] != '0' else '1')

    r = raw_client.get('/api/admin/products', headers={'Cookie': f'mrtech_admin={forged}'})
    assert r.status_code == 401

    r = raw_client.get('/api/admin/products', headers={'Cookie': f'mrtech_admin={token}'})
    assert r.status_code == 200


def test_garbage_cookie_rejected(raw_client):
    for value in ('', 'admin', 'a.b.c', 'admin.x.y.z'):
        r = raw_client.get('/api/admin/products', headers={'Cookie': f'mrtech_admin={value}'})
        assert r.status_code == 401


def test_session_expires_after_fourteen_days(admin_client, clock):
    clock.advance(SESSION_MAX_AGE_MS - 1)
    assert admin_client.get('/api/admin/products').status_code == 200
    clock.advance(1)
    assert admin_client.get('/api/admin/products').status_code == 401


def test_admin_page_shows_login_or_panel(client):
    r = client.get('/admin')
    assert r.status_code == 200
    assert 'Admin login' in r.get_data(as_text=True)

    client.post('/api/admin/login', json={'password': 'hunter2'})
    r = client.get('/admin')
    body = r.get_data(as_text=True)
    assert 'Add product' in body
    assert 'Admin login' not in body


def test_admin_panel_renders_inline_editors(admin_client, app):
    product_id = _add_product(app, brand='Lenovo', price_cents=129950, condition='GOOD',
                              screen_inches=14.0, featured=True)

    body = admin_client.get('/admin').get_data(as_text=True)
    assert f'data-id="{product_id}"' in body
    for key in ('status', 'price', 'quantity', 'warrantyDays', 'brand', 'model', 'condition',
                'cpu', 'ramGb', 'storageGb', 'storageType', 'screenInches', 'os',
                'accessoryType', 'compatibility', 'imageUrl', 'notes'):
        assert f'data-field="{key}"' in body, key
    assert 'data-field="price" value="1300"' in body
    assert 'data-field="brand" value="Lenovo"' in body
    assert 'data-field="screenInches" value="14"' in body
    assert '<option selected>GOOD</option>' in body
    assert 'Not set' in body
    assert 'Mark in stock' in body and 'Mark out of stock' in body
    assert 'Unfeature' in body
    assert 'id="refresh"' in body


def test_single_key_patches_from_panel(admin_client, app):
    product_id = _add_product(app, notes='Battery replaced', condition='FAIR')
    url = f'/api/admin/products/{product_id}'

    product = admin_client.put(url, json={'notes': ''}).get_json()['product']
    assert product['notes'] is None
    assert product['condition'] == 'FAIR'

    product = admin_client.put(url, json={'condition': None}).get_json()['product']
    assert product['condition'] is None

    product = admin_client.put(url, json={'featured': True}).get_json()['product']
    assert product['featured'] is True

    product = admin_client.put(url, json={'price': '1 250'}).get_json()['product']
    assert product['priceCents'] == 125000
    assert product['featured'] is True


# -----------------------------------------------------------------------------
# Product CRUD
# -----------------------------------------------------------------------------

def test_create_and_list_products(admin_client):
    r = admin_client.post('/api/admin/products', json={
        'name': 'Dell Latitude 5490',
        'category': 'REFURB',
        'ramGb': '8',
        'storageType': 'SSD',
        'price': 'R3 999',
        'featured': True,
    })
    assert r.status_code == 200
    product = r.get_json()['product']
    assert product['name'] == 'Dell Latitude 5490'
    assert product['ramGb'] == 8
    assert product['priceCents'] == 399900
    assert product['quantity'] == 1
    assert product['status'] == 'IN_STOCK'
    assert product['featured'] is True

    r = admin_client.get('/api/admin/products')
    data = r.get_json()
    assert data['ok'] is True
    assert [p['id'] for p in data['products']] == [product['id']]


def test_create_product_validation(admin_client, app):
    r = admin_client.post('/api/admin/products', json={'name': 'Mouse'})
    assert r.status_code == 400
    assert r.get_json() == {'ok': False, 'error': 'Missing fields'}

    r = admin_client.post('/api/admin/products', json={'name': 'Mouse', 'category': 'ACCESSORY', 'quantity': -1})
    assert r.status_code == 400
    assert r.get_json()['error'] == 'Invalid quantity'
    assert _product_count(app) == 0


def test_update_product(admin_client, app):
    product_id = _add_product(app, brand='Lenovo')

    r = admin_client.put(f'/api/admin/products/{product_id}',
                         json={'status': 'OUT_OF_STOCK', 'brand': '', 'price': '4200'})
    assert r.status_code == 200
    updated = r.get_json()['product']
    assert updated['status'] == 'OUT_OF_STOCK'
    assert updated['brand'] is None
    assert updated['priceCents'] == 420000
    assert updated['name'] == 'ThinkPad T480'


def test_update_product_validation_and_missing(admin_client, app):
    product_id = _add_product(app)

    r = admin_client.put(f'/api/admin/products/{product_id}', json={'condition': 'MINT'})
    assert r.status_code == 400
    assert r.get_json()['error'] == 'Invalid condition'

    r = admin_client.put('/api/admin/products/does-not-exist', json={'name': 'x'})
    assert r.status_code == 404
    assert r.get_json() == {'ok': False, 'error': 'Product not found'}


def test_delete_product(admin_client, app):
    product_id = _add_product(app)

    r = admin_client.delete(f'/api/admin/products/{product_id}')
    assert r.status_code == 200
    assert r.get_json() == {'ok': True}
    with app.app_context():
        assert db.session.get(Product, product_id) is None

    r = admin_client.delete(f'/api/admin/products/{product_id}')
    assert r.status_code == 404


def test_storage_failure_during_lookup_is_json_error(admin_client, app, monkeypatch):
    from sqlalchemy.exc import OperationalError
    import mrtech.api.products as products_api

    product_id = _add_product(app)

    def locked(product_id):
        raise OperationalError('SELECT', {}, Exception('database is locked'))

    monkeypatch.setattr(products_api, '_get_product_or_404', locked)

    r = admin_client.put(f'/api/admin/products/{product_id}', json={'notes': 'x'})
    assert r.status_code == 500
    assert r.get_json()['ok'] is False
    assert 'database is locked' in r.get_json()['error']

    r = admin_client.delete(f'/api/admin/products/{product_id}')
    assert r.status_code == 500
    assert r.get_json()['ok'] is False
    assert _product_count(app) == 1


# -----------------------------------------------------------------------------
# Uploads
# -----------------------------------------------------------------------------

def test_upload_image(admin_client):
    r = admin_client.post('/api/admin/upload',
                          data={'file': (io.BytesIO(b'\xff\xd8\xff fake jpeg'), 'photo.jpg', 'image/jpeg')},
                          content_type='multipart/form-data')
    assert r.status_code == 200
    url = r.get_json()['url']
    assert url.startswith('/uploads/') and url.endswith('.jpg')

    r = admin_client.get(url)
    assert r.status_code == 200
    assert r.data == b'\xff\xd8\xff fake jpeg'


def test_upload_errors(admin_client):
    r = admin_client.post('/api/admin/upload', data={}, content_type='multipart/form-data')
    assert r.status_code == 400
    assert r.get_json()['error'] == 'Missing file'

    r = admin_client.post('/api/admin/upload',
                          data={'file': (io.BytesIO(b'GIF89a'), 'anim.gif', 'image/gif')},
                          content_type='multipart/form-data')
    assert r.status_code == 415

    big = io.BytesIO(b'x' * (6 * 1024 * 1024 + 1))
    r = admin_client.post('/api/admin/upload',
                          data={'file': (big, 'huge.png', 'image/png')},
                          content_type='multipart/form-data')
    assert r.status_code == 413
    assert r.get_json() == {'ok': False, 'error': 'File too large (max 6MB)'}


# -----------------------------------------------------------------------------
# Public pages
# -----------------------------------------------------------------------------

def test_home_page(client, app):
    _add_product(app, name='Featured Laptop', featured=True)
    r = client.get('/')
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert 'Mr Tech' in body
    assert 'Featured Laptop' in body


def test_stock_page_groups_products(client, app):
    _add_product(app, name='HP EliteBook 840', price_cents=529950)
    _add_product(app, name='Wireless Mouse', category='ACCESSORY', price_cents=15000, status='OUT_OF_STOCK')

    r = client.get('/stock')
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    refurb_section, accessories_section = body.split('Accessories</h2>')
    assert 'HP EliteBook 840' in refurb_section
    assert 'R 5300' in refurb_section
    assert 'Wireless Mouse' in accessories_section
    assert 'R 150' in accessories_section
    assert 'Out of stock' in accessories_section


def test_stock_page_empty(client):
    body = client.get('/stock').get_data(as_text=True)
    assert 'No refurbished items yet.' in body
    assert 'No accessories yet.' in body
