import uuid
from decimal import Decimal

import pytest
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from wellness.models import Image, Order, OrderItem, Partner, Product

pytestmark = pytest.mark.django_db


def make_partner(creator, **kw):
    fields = {
        'name': 'Acme Clinic',
        'profession': 'Clinic',
        'business_address': '12 Marina Road, Lagos',
        'created_by': creator,
    }
    fields.update(kw)
    return Partner.objects.create(**fields)


def payload(**kw):
    data = {
        'name': 'Bright Smile Dental',
        'profession': 'Dentist',
        'businessAddress': '4 Allen Avenue, Ikeja',
        'partnerType': 'business',
    }
    data.update(kw)
    return data


# --- create -------------------------------------------------------------------

def test_create_without_file_has_no_image(admin_client, admin_user, media_store):
    r = admin_client.post('/api/partners', payload(), format='json')
    assert r.status_code == 201
    assert r.data['success'] is True
    assert r.data['message'] == 'Partner created successfully'
    assert r.data['data']['partnerImage'] is None
    assert r.data['data']['isActive'] is True
    assert r.data['data']['createdBy']['id'] == str(admin_user.id)
    assert Image.objects.count() == 0
    assert media_store.uploads == []


def test_create_with_file_records_one_image(admin_client, media_store, image_file):
    r = admin_client.post('/api/partners', payload(file=image_file()), format='multipart')
    assert r.status_code == 201
    assert Image.objects.count() == 1
    partner = Partner.objects.get(id=r.data['data']['id'])
    assert partner.image.image_cld_id == media_store.uploads[0][1]
    assert r.data['data']['partnerImage']['imageCldId'] == media_store.uploads[0][1]
    assert r.data['data']['partnerImage']['imageUrl'].startswith('https://media.example.com/partners/')


def test_create_multipart_defaults_to_active(admin_client, media_store):
    r = admin_client.post('/api/partners', payload(), format='multipart')
    assert r.status_code == 201
    assert r.data['data']['isActive'] is True


def test_social_links_json_string_is_parsed(admin_client, media_store):
    links = '["https://facebook.com/acme", " https://instagram.com/acme "]'
    r = admin_client.post('/api/partners', payload(socialLinks=links), format='multipart')
    assert r.status_code == 201
    assert r.data['data']['socialLinks'] == ['https://facebook.com/acme', 'https://instagram.com/acme']


def test_social_links_unparseable_string_becomes_single_link(admin_client, media_store):
    r = admin_client.post('/api/partners', payload(socialLinks='https://x.com/acme'), format='multipart')
    assert r.status_code == 201
    assert r.data['data']['socialLinks'] == ['https://x.com/acme']


def test_social_links_must_be_urls(admin_client, media_store):
    r = admin_client.post('/api/partners', payload(socialLinks=['not a link']), format='json')
    assert r.status_code == 400
    assert r.data['success'] is False
    assert 'social' in r.data['message'].lower()
    assert Partner.objects.count() == 0


def test_create_rejects_unknown_partner_type(admin_client, media_store):
    r = admin_client.post('/api/partners', payload(partnerType='franchise'), format='json')
    assert r.status_code == 400
    assert r.data['success'] is False


def test_create_requires_name(admin_client, media_store):
    data = payload()
    data.pop('name')
    r = admin_client.post('/api/partners', data, format='json')
    assert r.status_code == 400
    assert 'name' in r.data['message']


def test_invalid_payload_never_reaches_media_store(admin_client, media_store, image_file):
    r = admin_client.post('/api/partners', payload(website='nope', file=image_file()), format='multipart')
    assert r.status_code == 400
    assert media_store.uploads == []


def test_failed_create_removes_uploaded_image(admin_client, media_store, image_file, monkeypatch):
    def boom(self, *args, **kwargs):
        raise RuntimeError('database went away')

    monkeypatch.setattr(Partner, 'save', boom)
    r = admin_client.post('/api/partners', payload(file=image_file()), format='multipart')
    assert r.status_code == 500
    assert r.data == {'success': False, 'message': 'Internal server error'}
    assert len(media_store.uploads) == 1
    assert media_store.deleted == [media_store.uploads[0][1]]
    assert Image.objects.count() == 0


def test_non_image_upload_is_rejected(admin_client, media_store):
    from django.core.files.uploadedfile import SimpleUploadedFile
    doc = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
    r = admin_client.post('/api/partners', payload(file=doc), format='multipart')
    assert r.status_code == 400
    assert media_store.uploads == []


# --- auth ---------------------------------------------------------------------

def test_missing_identity_is_401():
    r = APIClient().post('/api/partners', payload(), format='json')
    assert r.status_code == 401
    assert r.data['success'] is False


def test_non_admin_is_forbidden(user_client):
    r = user_client.get('/api/partners')
    assert r.status_code == 403
    assert r.data == {'success': False, 'message': 'Admin access required'}


def test_jwt_bearer_is_accepted(admin_user):
    client = APIClient()
    token = RefreshToken.for_user(admin_user).access_token
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    r = client.get('/api/partners')
    assert r.status_code == 200


def test_legacy_token_is_accepted(admin_user):
    client = APIClient()
    token = Token.objects.create(user=admin_user)
    client.credentials(HTTP_AUTHORIZATION=f'Token {token.key}')
    r = client.get('/api/partners/stats')
    assert r.status_code == 200


# --- read ---------------------------------------------------------------------

def test_search_matches_name_or_profession_case_insensitively(admin_client, admin_user):
    make_partner(admin_user, name='Gynae Care Centre', profession='Clinic')
    make_partner(admin_user, name='City Pharmacy', profession='GYNecology')
    make_partner(admin_user, name='Bright Smile', profession='Dentist')
    r = admin_client.get('/api/partners', {'search': 'gyn'})
    assert r.status_code == 200
    assert r.data['count'] == 2
    for item in r.data['data']:
        assert 'gyn' in item['name'].lower() or 'gyn' in item['profession'].lower()


def test_list_filters(admin_client, admin_user):
    make_partner(admin_user, name='A', partner_type='individual', is_active=False)
    make_partner(admin_user, name='B', partner_type='business')
    make_partner(admin_user, name='C', partner_type='individual', profession='Nurse')

    r = admin_client.get('/api/partners', {'isActive': 'false'})
    assert [p['name'] for p in r.data['data']] == ['A']

    r = admin_client.get('/api/partners', {'partnerType': 'individual'})
    assert {p['name'] for p in r.data['data']} == {'A', 'C'}

    r = admin_client.get('/api/partners', {'profession': 'Nurse'})
    assert [p['name'] for p in r.data['data']] == ['C']


def test_list_populates_creator(admin_client, admin_user):
    make_partner(admin_user)
    r = admin_client.get('/api/partners')
    creator = r.data['data'][0]['createdBy']
    assert creator == {'id': str(admin_user.id), 'name': 'Ada Admin', 'email': 'admin@example.com'}
    assert r.data['data'][0]['formattedCreatedAt']


def test_active_list_is_public_and_active_only(admin_user):
    make_partner(admin_user, name='Open', is_active=True)
    make_partner(admin_user, name='Closed', is_active=False)
    r = APIClient().get('/api/partners/active')
    assert r.status_code == 200
    assert [p['name'] for p in r.data['data']] == ['Open']


def test_malformed_id_is_400_without_queries(admin_client, django_assert_num_queries):
    with django_assert_num_queries(0):
        r = admin_client.get('/api/partners/abc')
    assert r.status_code == 400
    assert r.data == {'success': False, 'message': 'Invalid partner ID'}


def test_unknown_id_is_404(admin_client):
    r = admin_client.get(f'/api/partners/{uuid.uuid4()}')
    assert r.status_code == 404
    assert r.data == {'success': False, 'message': 'Partner not found'}


def test_get_by_id(admin_client, admin_user):
    p = make_partner(admin_user, name='Single')
    r = admin_client.get(f'/api/partners/{p.id}')
    assert r.status_code == 200
    assert r.data['data']['name'] == 'Single'


# --- update / delete ----------------------------------------------------------

def test_update_merges_fields(admin_client, admin_user, media_store):
    p = make_partner(admin_user, description='old')
    r = admin_client.put(f'/api/partners/{p.id}', {'description': 'Family planning services'}, format='json')
    assert r.status_code == 200
    p.refresh_from_db()
    assert p.description == 'Family planning services'
    assert p.name == 'Acme Clinic'
    assert p.is_active is True


def test_update_revalidates_whole_record(admin_client, admin_user, media_store):
    p = make_partner(admin_user)
    r = admin_client.put(f'/api/partners/{p.id}', {'phone': 'call me'}, format='json')
    assert r.status_code == 400
    p.refresh_from_db()
    assert p.phone == ''


def test_update_replaces_image(admin_client, media_store, image_file):
    created = admin_client.post('/api/partners', payload(file=image_file('a.png')), format='multipart')
    pid = created.data['data']['id']
    first_handle = media_store.uploads[0][1]

    r = admin_client.put(f'/api/partners/{pid}', {'file': image_file('b.png')}, format='multipart')
    assert r.status_code == 200
    assert media_store.deleted == [first_handle]
    assert Image.objects.count() == 1
    partner = Partner.objects.get(id=pid)
    assert partner.image.image_cld_id == media_store.uploads[1][1]
    assert r.data['data']['partnerImage']['imageCldId'] == media_store.uploads[1][1]


def test_delete_without_image_skips_media_store(admin_client, admin_user, media_store):
    p = make_partner(admin_user)
    r = admin_client.delete(f'/api/partners/{p.id}')
    assert r.status_code == 200
    assert r.data['success'] is True
    assert media_store.deleted == []
    assert not Partner.objects.filter(id=p.id).exists()


def test_delete_removes_image(admin_client, media_store, image_file):
    created = admin_client.post('/api/partners', payload(file=image_file()), format='multipart')
    pid = created.data['data']['id']
    r = admin_client.delete(f'/api/partners/{pid}')
    assert r.status_code == 200
    assert media_store.deleted == [media_store.uploads[0][1]]
    assert Image.objects.count() == 0


def test_toggle_twice_restores_state(admin_client, admin_user):
    p = make_partner(admin_user, is_active=True)
    r1 = admin_client.patch(f'/api/partners/{p.id}/toggle-status')
    assert r1.data['data']['isActive'] is False
    assert r1.data['message'] == 'Partner deactivated successfully'
    r2 = admin_client.patch(f'/api/partners/{p.id}/toggle-status')
    assert r2.data['data']['isActive'] is True
    assert r2.data['message'] == 'Partner activated successfully'
    p.refresh_from_db()
    assert p.is_active is True


# --- stats / orders -----------------------------------------------------------

def test_stats_add_up(admin_client, admin_user):
    make_partner(admin_user, name='A', is_active=True, partner_type='individual')
    make_partner(admin_user, name='B', is_active=False)
    make_partner(admin_user, name='C', is_active=True)
    r = admin_client.get('/api/partners/stats')
    stats = r.data['data']
    assert stats['total'] == 3
    assert stats['active'] + stats['inactive'] == stats['total']
    assert {row['partnerType']: row['count'] for row in stats['byType']} == {'business': 2, 'individual': 1}


def test_partner_orders_summary(admin_client, admin_user, plain_user):
    partner = make_partner(admin_user)
    product = Product.objects.create(
        partner_product_id='p-1', name='Condoms (12)', image_url='https://cdn.example.com/c.png', price=Decimal('2500.00'),
    )
    other = Product.objects.create(partner_product_id='p-2', name='Test kit', price=Decimal('1000.00'))
    owned = Order.objects.create(
        partner=partner, user=plain_user, subtotal=Decimal('6000'), total=Decimal('6000'),
        payment_status='paid', platform='PlanAmWell',
    )
    OrderItem.objects.create(order=owned, product=product, qty=2, price=Decimal('2500'))
    OrderItem.objects.create(order=owned, product=other, qty=1, price=Decimal('1000'))
    guest = Order.objects.create(partner=partner, subtotal=Decimal('1000'), total=Decimal('1000'))
    OrderItem.objects.create(order=guest, product=other, qty=1, price=Decimal('1000'))

    r = admin_client.get(f'/api/partners/{partner.id}/orders')
    assert r.status_code == 200
    assert r.data['count'] == 2
    by_id = {o['orderId']: o for o in r.data['data']}

    summary = by_id[owned.order_number]
    assert summary['totalPrice'] == 6000.0
    assert summary['status'] == 'paid'
    assert summary['user'] == {'name': 'Uche User', 'origin': 'PlanAmWell'}
    assert summary['itemCount'] == 2
    assert summary['frontImage'] == 'https://cdn.example.com/c.png'

    assert by_id[guest.order_number]['user'] == {'name': 'Guest', 'origin': 'N/A'}
    assert by_id[guest.order_number]['frontImage'] is None


def test_blank_is_active_lists_inactive(admin_client, admin_user):
    make_partner(admin_user, name='On', is_active=True)
    make_partner(admin_user, name='Off', is_active=False)
    r = admin_client.get('/api/partners', {'isActive': ''})
    assert r.status_code == 200
    assert [p['name'] for p in r.data['data']] == ['Off']
