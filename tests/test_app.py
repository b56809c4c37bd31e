from app import full_input


def test_full_input():
    assert full_input('3', 'gal') == '3 gal'
    assert full_input('', 'lbs') == 'lbs'
    assert full_input(None, 'gal') == 'gal'


def test_index_page(client):
    resp = client.get('/')
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert 'Convert Gallons to Liters' in body
    assert 'Convert Pounds to Kilograms' in body


def test_post_gallons(client):
    resp = client.post('/', data={'input': '3 1/2', 'unit': 'gal'})
    body = resp.get_data(as_text=True)
    assert '<p id="output1"><strong>3.5 gallons = 13.2489 liters</strong></p>' in body
    assert '<p id="output2"></p>' in body


def test_post_pounds_error(client):
    resp = client.post('/', data={'input': '1/0', 'unit': 'lbs'})
    body = resp.get_data(as_text=True)
    assert '<p id="output2"><strong>invalid number</strong></p>' in body


def test_post_escapes_input(client):
    resp = client.post('/', data={'input': '<b>', 'unit': 'gal'})
    body = resp.get_data(as_text=True)
    assert '<b>' not in body.split('<h1>')[1]
    assert '<strong>invalid number</strong>' in body


def test_api_convert(client):
    resp = client.get('/api/convert', query_string={'input': '1gal'})
    assert resp.get_json() == {
        'initNum': 1, 'initUnit': 'gal', 'returnNum': 3.78541,
        'returnUnit': 'l', 'string': '1 gallon = 3.78541 liters',
    }


def test_api_convert_errors(client):
    assert client.get('/api/convert').get_json() == {'error': 'input required'}
    resp = client.get('/api/convert', query_string={'input': '5xyz'})
    assert resp.get_json() == {'error': 'invalid unit'}
    resp = client.get('/api/convert', query_string={'input': 'a=5gal'})
    assert resp.get_json() == {'error': 'invalid number'}


def test_not_found(client):
    resp = client.get('/nope')
    assert resp.status_code == 404
    assert resp.get_data(as_text=True) == 'Not Found'
