def test_about_page(client):
    response = client.get('/about')

    assert response.status_code == 200
    assert 'About Us - Malawi Tourism Blog' in response.get_data(as_text=True)


def test_contact_page(client):
    assert client.get('/contact').status_code == 200


def test_contact_requires_all_fields(client):
    response = client.post('/contact', data={'name': 'Chikondi', 'email': '', 'message': 'Hello'})

    assert response.status_code == 400
    body = response.get_data(as_text=True)
    assert 'All fields are required' in body
    assert 'Chikondi' in body


def test_contact_success(client):
    response = client.post('/contact', data={'name': 'Chikondi', 'email': 'c@example.com',
                                             'message': 'Hello'})

    assert response.status_code == 200
    assert 'Thank you for your message!' in response.get_data(as_text=True)


def test_unknown_route(client):
    response = client.get('/does-not-exist')

    assert response.status_code == 404
    body = response.get_data(as_text=True)
    assert 'Page not found. The requested URL was not found on this server.' in body
    assert 'Page Not Found - Malawi Tourism Blog' in body
