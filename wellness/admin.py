"""
Django admin registrations for the wellness models.

Lets superusers inspect partners, accounts, doctors and payments at
``/admin/`` without going through the API.
"""

from django.contrib import admin

from .models import Doctor, Image, Order, OrderItem, Partner, Payment, Product, Review, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'email', 'name', 'roles', 'verified', 'is_superuser')
    list_filter = ('verified', 'is_superuser')
    search_fields = ('username', 'email', 'name', 'phone')


@admin.register(Image)
class ImageAdmin(admin.ModelAdmin):
    list_display = ('id', 'image_cld_id', 'uploaded_by', 'created_at')
    search_fields = ('image_cld_id',)


@admin.register(Partner)
class PartnerAdmin(admin.ModelAdmin):
    list_display = ('name', 'profession', 'partner_type', 'is_active', 'created_by', 'created_at')
    list_filter = ('partner_type', 'is_active')
    search_fields = ('name', 'profession', 'email')


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('first_name', 'last_name', 'specialization', 'status', 'created_at')
    list_filter = ('status', 'specialization')
    search_fields = ('first_name', 'last_name', 'email', 'license_number')


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('doctor', 'name', 'rating', 'created_at')
    list_filter = ('rating',)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'sku', 'price', 'stock_quantity', 'status')
    search_fields = ('name', 'sku', 'partner_product_id')


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('order_number', 'partner', 'user', 'total', 'payment_status', 'delivery_status', 'created_at')
    list_filter = ('payment_status', 'delivery_status', 'platform')
    search_fields = ('order_number', 'partner_order_id')
    inlines = [OrderItemInline]


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('payment_reference', 'payment_method', 'amount', 'status', 'created_at')
    list_filter = ('status', 'payment_method')
    search_fields = ('payment_reference', 'transaction_id')
