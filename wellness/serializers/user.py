import bleach
from rest_framework import serializers


class UserUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32)
    email = serializers.EmailField(required=False, allow_blank=True)
    gender = serializers.CharField(required=False, allow_blank=True, max_length=20)
    dateOfBirth = serializers.CharField(required=False, allow_blank=True, max_length=32)
    homeAddress = serializers.CharField(required=False, allow_blank=True, max_length=300)
    city = serializers.CharField(required=False, allow_blank=True, max_length=100)
    state = serializers.CharField(required=False, allow_blank=True, max_length=100)
    lga = serializers.CharField(required=False, allow_blank=True, max_length=100)
    preferences = serializers.JSONField(required=False)

    def validate_name(self, v):
        return bleach.clean(v.strip(), strip=True)

    def validate_preferences(self, v):
        if not isinstance(v, dict):
            raise serializers.ValidationError('Preferences must be an object')
        return v
