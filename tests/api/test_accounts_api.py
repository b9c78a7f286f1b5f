"""账户接口测试"""
import re
from datetime import timedelta
from smtplib import SMTPException

import pytest
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.files.storage import default_storage
from django.db import DatabaseError
from django.utils import timezone

from accounts.infrastructure.models.account_models import PaymentCard, UserVisit
from accounts.infrastructure.repositories.django_user_repository import DjangoUserRepository

pytestmark = pytest.mark.django_db

TINY_PNG = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


# ==================== 注册与登录 ====================

def test_register_creates_member(api_client):
    response = api_client.post('/api/auth/register', {
        'name': "Rina Wijaya",
        'email': "Rina@Example.com",
        'password': "long-enough-1",
    }, format='json')

    assert response.status_code == 201
    body = response.json()
    assert body['success'] is True
    assert body['data']['email'] == "rina@example.com"
    user = get_user_model().objects.get(email="rina@example.com")
    assert user.role == "member"
    assert user.check_password("long-enough-1")


def test_register_rejects_duplicate_email(api_client, user):
    response = api_client.post('/api/auth/register', {
        'name': "Budi Lain",
        'email': user.email,
        'password': "long-enough-1",
    }, format='json')

    assert response.status_code == 409
    assert response.json()['success'] is False


def test_register_validates_payload(api_client):
    response = api_client.post('/api/auth/register', {
        'name': "R",
        'email': "not-an-email",
        'password': "short",
    }, format='json')

    assert response.status_code == 400
    assert set(response.json()['data']) == {'name', 'email', 'password'}


def test_login_and_logout(api_client, user, password):
    response = api_client.post('/api/auth/login', {'email': user.email, 'password': password}, format='json')

    assert response.status_code == 200
    assert response.json()['data']['role'] == "member"
    assert api_client.get('/api/setting/user').status_code == 200

    api_client.post('/api/auth/logout')
    assert api_client.get('/api/setting/user').status_code == 401


def test_login_with_wrong_password(api_client, user):
    response = api_client.post('/api/auth/login', {'email': user.email, 'password': "wrong-pass"}, format='json')

    assert response.status_code == 401
    assert response.json()['code'] == 40101


# ==================== 重置密码 ====================

def test_password_reset_flow(api_client, user, mailoutbox):
    response = api_client.post('/api/auth/forgot-password', {'email': user.email}, format='json')
    assert response.status_code == 200
    assert len(mailoutbox) == 1

    token = re.search(r"token=([0-9a-f]{64})", mailoutbox[0].body).group(1)
    user.refresh_from_db()
    assert user.reset_token and user.reset_token != token

    verify = api_client.get('/api/auth/verify-reset-token', {'token': token})
    assert verify.json()['data'] == {'valid': True}

    reset = api_client.post('/api/auth/reset-password', {'token': token, 'newPassword': "brand-new-pass"}, format='json')
    assert reset.status_code == 200
    user.refresh_from_db()
    assert user.check_password("brand-new-pass")
    assert user.reset_token is None
    assert len(mailoutbox) == 2

    reused = api_client.post('/api/auth/reset-password', {'token': token, 'newPassword': "another-pass-1"}, format='json')
    assert reused.status_code == 400


def request_reset_token(api_client, user, mailoutbox):
    api_client.post('/api/auth/forgot-password', {'email': user.email}, format='json')
    return re.search(r"token=([0-9a-f]{64})", mailoutbox[-1].body).group(1)


def test_expired_reset_token_is_rejected(api_client, user, mailoutbox):
    token = request_reset_token(api_client, user, mailoutbox)
    get_user_model().objects.filter(pk=user.pk).update(reset_token_expires=timezone.now() - timedelta(minutes=1))

    verify = api_client.get('/api/auth/verify-reset-token', {'token': token})
    assert verify.json()['data'] == {'valid': False}

    reset = api_client.post('/api/auth/reset-password', {'token': token, 'newPassword': "brand-new-pass"}, format='json')
    assert reset.status_code == 400
    user.refresh_from_db()
    assert not user.check_password("brand-new-pass")


def test_forgot_password_succeeds_when_mail_fails(api_client, user, monkeypatch):
    def broken_send_mail(**kwargs):
        raise SMTPException("connection refused")

    monkeypatch.setattr("accounts.infrastructure.services.mail_service.send_mail", broken_send_mail)

    response = api_client.post('/api/auth/forgot-password', {'email': user.email}, format='json')

    assert response.status_code == 200
    assert response.json()['success'] is True
    user.refresh_from_db()
    assert user.reset_token


def test_forgot_password_for_unknown_email_still_succeeds(api_client, mailoutbox):
    response = api_client.post('/api/auth/forgot-password', {'email': "nobody@example.com"}, format='json')

    assert response.status_code == 200
    assert mailoutbox == []


def test_verify_reset_token_requires_token(api_client):
    response = api_client.get('/api/auth/verify-reset-token')

    assert response.status_code == 400
    assert response.json()['code'] == 40003


# ==================== 个人设置 ====================

def test_update_profile_with_avatar(user_client, user):
    response = user_client.put('/api/setting/user/update', {
        'fullName': "Budi S.",
        'phone': "08123456789",
        'address': "Jl. Merdeka 1, Jakarta",
        'bio': "",
        'avatar': TINY_PNG,
    }, format='json')

    assert response.status_code == 200
    profile = response.json()['data']['user']
    assert profile['fullname'] == "Budi S."
    assert profile['phone'] == "08123456789"
    assert profile['image'].startswith('/media/uploads/avatars/')

    removed = user_client.delete('/api/setting/user/update')
    assert removed.status_code == 200
    user.refresh_from_db()
    assert user.image == ""


def stored_name(url):
    return url[len(settings.MEDIA_URL):]


def test_replaced_avatar_is_deleted_after_commit(user_client, django_capture_on_commit_callbacks):
    payload = {'fullName': "Budi", 'avatar': TINY_PNG}
    with django_capture_on_commit_callbacks(execute=True):
        first = user_client.put('/api/setting/user/update', payload, format='json').json()['data']['user']['image']

    with django_capture_on_commit_callbacks() as callbacks:
        second = user_client.put('/api/setting/user/update', payload, format='json').json()['data']['user']['image']

    assert second != first
    assert default_storage.exists(stored_name(first))
    assert len(callbacks) == 1

    callbacks[0]()

    assert not default_storage.exists(stored_name(first))
    assert default_storage.exists(stored_name(second))


def test_failed_profile_update_keeps_no_new_avatar(user_client, user, monkeypatch):
    def broken_save(self, account):
        raise DatabaseError("disk full")

    monkeypatch.setattr(DjangoUserRepository, "save", broken_save)

    response = user_client.put('/api/setting/user/update', {'fullName': "Budi", 'avatar': TINY_PNG}, format='json')

    assert response.status_code == 500
    _, files = default_storage.listdir('uploads/avatars/')
    assert not [name for name in files if name.startswith(str(user.id))]


def test_update_profile_rejects_bad_avatar(user_client):
    response = user_client.put('/api/setting/user/update', {
        'fullName': "Budi",
        'avatar': "data:image/png;base64,@@@",
    }, format='json')

    assert response.status_code == 400


def test_change_password(user_client, user, password):
    wrong = user_client.put('/api/setting/user/password', {
        'currentPassword': "not-my-password",
        'newPassword': "fresh-password-1",
    }, format='json')
    assert wrong.status_code == 400

    response = user_client.put('/api/setting/user/password', {
        'currentPassword': password,
        'newPassword': "fresh-password-1",
    }, format='json')
    assert response.status_code == 200
    user.refresh_from_db()
    assert user.check_password("fresh-password-1")


def test_settings_require_login(api_client):
    assert api_client.get('/api/setting/user').status_code == 401
    assert api_client.get('/api/setting/user/cards').status_code == 401


# ==================== 支付卡 ====================

def test_first_card_becomes_default(user_client, user):
    response = user_client.post('/api/setting/user/cards', {
        'card_number': "4111 1111 1111 1111",
        'cardholder_name': "BUDI SANTOSO",
        'expiry_month': 12,
        'expiry_year': 2030,
    }, format='json')

    assert response.status_code == 201
    card = response.json()['data']
    assert card['card_brand'] == "Visa"
    assert card['last4'] == "1111"
    assert card['is_default'] is True
    assert 'fingerprint' not in card


def test_switching_default_card(user_client, user):
    first = user_client.post('/api/setting/user/cards', {
        'card_number': "4111111111111111", 'cardholder_name': "BUDI",
    }, format='json').json()['data']
    second = user_client.post('/api/setting/user/cards', {
        'card_number': "5500000000000004", 'cardholder_name': "BUDI",
    }, format='json').json()['data']
    assert second['is_default'] is False

    response = user_client.patch('/api/setting/user/cards', {'card_id': second['id']}, format='json')

    assert response.status_code == 200
    defaults = PaymentCard.objects.filter(user=user, is_default=True)
    assert [str(card.id) for card in defaults] == [second['id']]

    deleted = user_client.delete(f"/api/setting/user/cards?card_id={first['id']}")
    assert deleted.status_code == 200
    assert PaymentCard.objects.filter(user=user).count() == 1


def test_cannot_touch_another_users_card(user_client, other_user):
    card = PaymentCard.objects.create(
        user=other_user, card_brand="Visa", cardholder_name="SARI", last4="1111", fingerprint="x" * 64,
    )

    response = user_client.patch('/api/setting/user/cards', {'card_id': str(card.id)}, format='json')

    assert response.status_code == 404


# ==================== 访问日志 ====================

def test_anonymous_visit_is_logged(api_client):
    response = api_client.post('/api/log-user-visit', {'url': "/products"}, format='json', REMOTE_ADDR="10.0.0.8")

    assert response.status_code == 201
    visit = UserVisit.objects.get()
    assert visit.user is None
    assert visit.ip == "10.0.0.8"
    assert visit.url == "/products"


def test_visit_uses_forwarded_ip(user_client, user):
    user_client.post('/api/log-user-visit', {}, format='json', HTTP_X_FORWARDED_FOR="203.0.113.5, 10.0.0.1")

    visit = UserVisit.objects.get()
    assert visit.ip == "203.0.113.5"
    assert visit.user_id == user.id


# ==================== 后台用户管理 ====================

def test_admin_lists_users(admin_api_client, user, other_user):
    response = admin_api_client.get('/api/admin/users', {'page': 1, 'limit': 2})

    assert response.status_code == 200
    data = response.json()['data']
    assert len(data['items']) == 2
    assert data['pagination'] == {'total': 3, 'page': 1, 'pageSize': 2, 'hasMore': True}


def test_admin_bulk_delete_skips_self(admin_api_client, admin, user):
    response = admin_api_client.post('/api/admin/users/bulk-delete', {
        'ids': [str(admin.id), str(user.id)],
    }, format='json')

    assert response.json()['data'] == {'deleted': 1}
    assert list(get_user_model().objects.values_list('email', flat=True)) == [admin.email]


def test_member_cannot_use_admin_endpoints(user_client):
    response = user_client.get('/api/admin/users')

    assert response.status_code == 403
    assert response.json()['code'] == 40300
