"""
Database models for the PlanAmWell backend.

Every record uses a UUID primary key; list-shaped attributes (social
links, roles, push tokens, availability) live in JSON columns so that
the stored rows keep the document shape the mobile clients consume.
Images are stored once in :class:`Image` and referenced by the entity
that owns them.
"""
from __future__ import annotations

import re
import uuid

from django.contrib.auth.models import AbstractUser
from django.core.exceptions import ValidationError
from django.core.validators import MaxLengthValidator, MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models

URL_PATTERN = re.compile(r'^(https?://)?([\da-z.-]+)\.([a-z.]{2,6})([/\w .-]*)/?$')
PHONE_PATTERN = re.compile(r'^\+?\(?[0-9]{3}\)?[-\s.]?[0-9]{3}[-\s.]?[0-9]{4,6}$')

ROLE_USER = 'User'
ROLE_ADMIN = 'Admin'
ROLE_DOCTOR = 'Doctor'
ROLES = (ROLE_USER, ROLE_ADMIN, ROLE_DOCTOR)


def default_roles() -> list[str]:
    return [ROLE_USER]


def validate_social_links(links) -> None:
    if not isinstance(links, list) or not all(isinstance(link, str) and URL_PATTERN.match(link) for link in links):
        raise ValidationError('All social links must be valid URLs')


def validate_roles(roles) -> None:
    if not isinstance(roles, list) or any(r not in ROLES for r in roles):
        raise ValidationError(f"Roles must be drawn from {', '.join(ROLES)}")


def validate_token_list(tokens) -> None:
    if not isinstance(tokens, list) or not all(isinstance(t, str) and t for t in tokens):
        raise ValidationError('Push tokens must be non-empty strings')
    if len(set(tokens)) != len(tokens):
        raise ValidationError('Push tokens must be unique')


class TimestampedModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Image(TimestampedModel):
    """A hosted image.

    ``image_cld_id`` is the opaque handle the media store returned; it is
    the only thing needed to delete the remote object.  The entity that
    references an image owns it and deletes it when replacing or
    removing the reference.
    """
    image_url = models.CharField(max_length=500)
    image_cld_id = models.CharField(max_length=255)
    uploaded_by = models.ForeignKey(
        'User', null=True, blank=True, on_delete=models.SET_NULL, related_name='uploaded_images'
    )

    def __str__(self) -> str:
        return self.image_cld_id


class User(AbstractUser):
    """Platform account.

    ``roles`` is a set of ``User``/``Admin``/``Doctor`` stored as a list.
    The password is hashed by the pre-save hook in :mod:`wellness.signals`
    whenever a raw value has been assigned.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, null=True, blank=True)
    name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    gender = models.CharField(max_length=20, blank=True)
    date_of_birth = models.CharField(max_length=32, blank=True)
    home_address = models.CharField(max_length=300, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    lga = models.CharField(max_length=100, blank=True)
    image = models.ForeignKey(Image, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    roles = models.JSONField(default=default_roles, blank=True, validators=[validate_roles])
    verified = models.BooleanField(default=False)
    preferences = models.JSONField(default=dict, blank=True)
    push_tokens = models.JSONField(default=list, blank=True, validators=[validate_token_list])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def clean(self) -> None:
        super().clean()
        # Same form the pre-save hook stores, so validate_unique sees it
        self.email = (self.email or '').strip().lower() or None

    def has_role(self, role: str) -> bool:
        return role in (self.roles or [])

    @property
    def display_name(self) -> str:
        return self.name or self.get_full_name() or self.username

    def __str__(self) -> str:
        return f"{self.username} ({', '.join(self.roles or [])})"


class Partner(TimestampedModel):
    """A business or individual affiliate shown to end users."""
    TYPE_INDIVIDUAL = 'individual'
    TYPE_BUSINESS = 'business'
    TYPE_CHOICES = ((TYPE_INDIVIDUAL, 'Individual'), (TYPE_BUSINESS, 'Business'))

    name = models.CharField(max_length=100, db_index=True)
    profession = models.CharField(max_length=100, db_index=True)
    business_address = models.CharField(max_length=300)
    partner_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_BUSINESS, db_index=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(
        max_length=32, blank=True,
        validators=[RegexValidator(PHONE_PATTERN, 'Please provide a valid phone number')],
    )
    description = models.TextField(blank=True, validators=[MaxLengthValidator(1000)])
    website = models.CharField(
        max_length=300, blank=True,
        validators=[RegexValidator(URL_PATTERN, 'Please provide a valid website URL')],
    )
    social_links = models.JSONField(default=list, blank=True, validators=[validate_social_links])
    is_active = models.BooleanField(default=True, db_index=True)
    image = models.ForeignKey(Image, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    created_by = models.ForeignKey(User, on_delete=models.PROTECT, related_name='partners_created')

    class Meta:
        ordering = ['-created_at']

    def clean(self) -> None:
        self.email = (self.email or '').strip().lower()

    @property
    def formatted_created_at(self) -> str | None:
        if not self.created_at:
            return None
        return f"{self.created_at:%B} {self.created_at.day}, {self.created_at.year}"

    def __str__(self) -> str:
        return f"{self.name} ({self.partner_type})"


class Doctor(TimestampedModel):
    STATUS_SUBMITTED = 'submitted'
    STATUS_REVIEWING = 'reviewing'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUS_CHOICES = (
        (STATUS_SUBMITTED, 'Submitted'),
        (STATUS_REVIEWING, 'Reviewing'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
    )

    user = models.OneToOneField(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='doctor_profile')
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    specialization = models.CharField(max_length=150, db_index=True)
    license_number = models.CharField(max_length=100)
    years_of_experience = models.PositiveIntegerField(null=True, blank=True)
    bio = models.TextField(blank=True)
    contact_number = models.CharField(max_length=32, blank=True)
    image = models.ForeignKey(Image, null=True, blank=True, on_delete=models.SET_NULL, related_name='+')
    availability = models.JSONField(default=dict, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_SUBMITTED, db_index=True)
    push_tokens = models.JSONField(default=list, blank=True, validators=[validate_token_list])

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self) -> str:
        return f"Dr. {self.full_name} ({self.specialization})"


class Review(TimestampedModel):
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='reviews')
    user = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='reviews')
    name = models.CharField(max_length=150, blank=True)
    rating = models.PositiveSmallIntegerField(
        default=5, validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    comment = models.TextField(blank=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.rating}/5 for {self.doctor_id}"


class Product(TimestampedModel):
    partner_product_id = models.CharField(max_length=64, unique=True)
    name = models.CharField(max_length=255)
    sku = models.CharField(max_length=64, blank=True)
    image_url = models.CharField(max_length=500, blank=True)
    category_name = models.CharField(max_length=150, blank=True)
    manufacturer_name = models.CharField(max_length=150, blank=True)
    prescription_required = models.BooleanField(default=False)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    stock_quantity = models.IntegerField(default=0)
    status = models.CharField(max_length=50, blank=True)

    def __str__(self) -> str:
        return self.name


def _order_number() -> str:
    return str(uuid.uuid4())


class Order(TimestampedModel):
    PAYMENT_CHOICES = (
        ('pending', 'Pending'),
        ('paid', 'Paid'),
        ('failed', 'Failed'),
        ('refunded', 'Refunded'),
    )
    DELIVERY_CHOICES = (
        ('pending', 'Pending'),
        ('shipped', 'Shipped'),
        ('delivered', 'Delivered'),
        ('cancelled', 'Cancelled'),
    )

    order_number = models.CharField(max_length=64, unique=True, default=_order_number)
    session_id = models.CharField(max_length=64, blank=True)
    user = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='orders')
    partner = models.ForeignKey(Partner, null=True, blank=True, on_delete=models.SET_NULL, related_name='orders')
    partner_order_id = models.CharField(max_length=64, blank=True)
    is_third_party_order = models.BooleanField(default=False)
    platform = models.CharField(max_length=50, default='PlanAmWell')
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    shipping_fee = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total = models.DecimalField(max_digits=12, decimal_places=2)
    payment_status = models.CharField(max_length=20, choices=PAYMENT_CHOICES, default='pending', db_index=True)
    delivery_status = models.CharField(max_length=20, choices=DELIVERY_CHOICES, default='pending')
    shipping_address = models.JSONField(default=dict, blank=True)
    discreet_packaging = models.BooleanField(default=False)

    class Meta:
        indexes = [models.Index(fields=['partner', 'created_at'], name='order_partner_created_idx')]

    def __str__(self) -> str:
        return self.order_number


class OrderItem(models.Model):
    """A line item; the auto-increment key keeps insertion order."""
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name='order_items')
    name = models.CharField(max_length=255, blank=True)
    sku = models.CharField(max_length=64, blank=True)
    qty = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.qty} x {self.name or self.product_id}"


class Payment(TimestampedModel):
    METHOD_CHOICES = (
        ('card', 'Card'),
        ('paystack', 'Paystack'),
        ('bank_transfer', 'Bank transfer'),
    )
    STATUS_CHOICES = (
        ('pending', 'Pending'),
        ('success', 'Success'),
        ('failed', 'Failed'),
    )

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='payments')
    user = models.ForeignKey(User, on_delete=models.PROTECT, related_name='payments')
    payment_method = models.CharField(max_length=20, choices=METHOD_CHOICES)
    partner_reference_code = models.CharField(max_length=100)
    payment_reference = models.CharField(max_length=100, unique=True)
    transaction_id = models.CharField(max_length=100)
    checkout_url = models.CharField(max_length=500)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.payment_reference} ({self.status})"
