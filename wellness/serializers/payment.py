from rest_framework import serializers


class PaymentListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=['pending', 'success', 'failed'], required=False)
    paymentMethod = serializers.ChoiceField(choices=['card', 'paystack', 'bank_transfer'], required=False)
