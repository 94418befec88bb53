import bleach
from rest_framework import serializers


class ReviewInputSerializer(serializers.Serializer):
    rating = serializers.IntegerField(required=False, default=5, min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, max_length=2000)
    name = serializers.CharField(required=False, allow_blank=True, max_length=150)

    def validate_comment(self, v):
        return bleach.clean((v or '').strip(), strip=True)


class DoctorListQuerySerializer(serializers.Serializer):
    specialization = serializers.CharField(required=False)
    status = serializers.ChoiceField(choices=['submitted', 'reviewing', 'approved', 'rejected'], required=False)
    search = serializers.CharField(required=False, max_length=100)
