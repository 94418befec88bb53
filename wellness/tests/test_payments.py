import uuid
from decimal import Decimal

import pytest

from wellness.models import Order, Payment, User

pytestmark = pytest.mark.django_db


def make_payment(user, **kw):
    order = Order.objects.create(user=user, subtotal=Decimal('5000'), total=Decimal('5000'))
    fields = {
        'order': order,
        'user': user,
        'payment_method': 'paystack',
        'partner_reference_code': 'PRC-1',
        'payment_reference': f'ref-{uuid.uuid4().hex[:10]}',
        'transaction_id': 'txn-1',
        'checkout_url': 'https://checkout.example.com/pay/1',
        'amount': Decimal('5000'),
    }
    fields.update(kw)
    return Payment.objects.create(**fields)


def test_admin_lists_and_filters_payments(admin_client, plain_user):
    make_payment(plain_user, status='success', payment_method='card')
    make_payment(plain_user, status='pending')
    r = admin_client.get('/api/payments')
    assert r.status_code == 200
    assert r.data['count'] == 2
    r = admin_client.get('/api/payments', {'status': 'success'})
    assert [p['paymentMethod'] for p in r.data['data']] == ['card']
    r = admin_client.get('/api/payments', {'paymentMethod': 'paystack'})
    assert [p['status'] for p in r.data['data']] == ['pending']


def test_payment_list_rejects_unknown_method(admin_client):
    r = admin_client.get('/api/payments', {'paymentMethod': 'cash'})
    assert r.status_code == 400


def test_payment_list_is_admin_only(user_client):
    assert user_client.get('/api/payments').status_code == 403


def test_owner_sees_own_payment(user_client, plain_user):
    p = make_payment(plain_user)
    r = user_client.get(f'/api/payments/{p.id}')
    assert r.status_code == 200
    assert r.data['data']['amount'] == 5000.0
    assert r.data['data']['userId'] == str(plain_user.id)


def test_other_users_payment_is_hidden(user_client):
    stranger = User.objects.create_user(username='stranger', password='P@ssw0rd1')
    p = make_payment(stranger)
    r = user_client.get(f'/api/payments/{p.id}')
    assert r.status_code == 404


def test_admin_sees_any_payment(admin_client, plain_user):
    p = make_payment(plain_user)
    assert admin_client.get(f'/api/payments/{p.id}').status_code == 200
