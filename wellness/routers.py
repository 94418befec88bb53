"""
URL mappings for the PlanAmWell API.

Trailing slashes are omitted; fixed segments such as ``active``,
``stats`` and ``me`` are registered before the identifier routes that
would otherwise capture them.
"""
from django.urls import include, path

from .views import doctors, health, partners, payments, users

urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('healthz', health.healthz),

    path('api/partners', partners.partner_collection),
    path('api/partners/active', partners.active_partners),
    path('api/partners/stats', partners.partner_stats),
    path('api/partners/<str:partner_id>', partners.partner_detail),
    path('api/partners/<str:partner_id>/toggle-status', partners.toggle_partner_status),
    path('api/partners/<str:partner_id>/orders', partners.partner_orders),

    path('api/users', users.user_list),
    path('api/users/me', users.me),
    path('api/users/me/push-tokens', users.my_push_tokens),
    path('api/users/<str:user_id>', users.user_detail),
    path('api/users/<str:user_id>/image', users.user_image),

    path('api/doctors', doctors.doctor_list),
    path('api/doctors/me/push-tokens', doctors.my_push_tokens),
    path('api/doctors/<str:doctor_id>', doctors.doctor_detail),
    path('api/doctors/<str:doctor_id>/reviews', doctors.doctor_reviews),

    path('api/payments', payments.payment_list),
    path('api/payments/<str:payment_id>', payments.payment_detail),
]
