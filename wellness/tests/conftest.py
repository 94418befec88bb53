import itertools

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from wellness.models import ROLE_ADMIN, ROLE_USER, User
from wellness.services import media


class FakeMediaStore:
    """Records uploads and deletes instead of touching real storage."""

    def __init__(self):
        self.uploads = []
        self.deleted = []
        self._seq = itertools.count(1)

    def upload(self, buffer, folder, *, filename=''):
        n = next(self._seq)
        stored = media.StoredMedia(
            secure_url=f'https://media.example.com/{folder}/img{n}.png',
            public_id=f'{folder}/img{n}',
        )
        self.uploads.append((folder, stored.public_id, len(buffer)))
        return stored

    def delete(self, public_id):
        self.deleted.append(public_id)


@pytest.fixture
def media_store(monkeypatch):
    store = FakeMediaStore()
    monkeypatch.setattr(media, 'upload', store.upload)
    monkeypatch.setattr(media, 'delete', store.delete)
    return store


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        username='admin1', password='P@ssw0rd1', email='admin@example.com', name='Ada Admin',
        roles=[ROLE_USER, ROLE_ADMIN],
    )


@pytest.fixture
def plain_user(db):
    return User.objects.create_user(
        username='user1', password='P@ssw0rd1', email='user1@example.com', name='Uche User',
    )


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def user_client(plain_user):
    client = APIClient()
    client.force_authenticate(user=plain_user)
    return client


@pytest.fixture
def image_file():
    def make(name='logo.png'):
        return SimpleUploadedFile(name, b'\x89PNG\r\n\x1a\nfake-image-bytes', content_type='image/png')
    return make
