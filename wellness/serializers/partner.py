import json

import bleach
from rest_framework import serializers
from rest_framework.fields import empty
from rest_framework.utils import html


class SocialLinksField(serializers.Field):
    """A list of links that may also arrive as one JSON-encoded string.

    Multipart clients send ``socialLinks='["https://a.com", ...]'``; a
    string that is not valid JSON is kept as a single link.
    """

    def get_value(self, dictionary):
        if html.is_html_input(dictionary):
            values = dictionary.getlist(self.field_name)
            if not values:
                return empty
            return values if len(values) > 1 else values[0]
        return dictionary.get(self.field_name, empty)

    def to_internal_value(self, data):
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError:
                data = [data]
            if isinstance(data, str):
                data = [data]
        if not isinstance(data, list):
            raise serializers.ValidationError('Expected a list of links')
        return [link.strip() if isinstance(link, str) else link for link in data]

    def to_representation(self, value):
        return list(value or [])


class PartnerInputSerializer(serializers.Serializer):
    name = serializers.CharField()
    profession = serializers.CharField()
    businessAddress = serializers.CharField()
    partnerType = serializers.ChoiceField(choices=['individual', 'business'], required=False)
    email = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    website = serializers.CharField(required=False, allow_blank=True)
    socialLinks = SocialLinksField(required=False)
    isActive = serializers.BooleanField(required=False, default=True)

    def validate_name(self, v):
        return bleach.clean(v.strip(), strip=True)

    def validate_profession(self, v):
        return bleach.clean(v.strip(), strip=True)

    def validate_description(self, v):
        return bleach.clean((v or '').strip(), strip=True)


class PartnerListQuerySerializer(serializers.Serializer):
    isActive = serializers.CharField(required=False, allow_blank=True)
    partnerType = serializers.ChoiceField(choices=['individual', 'business'], required=False)
    profession = serializers.CharField(required=False, allow_blank=True)
    search = serializers.CharField(required=False, max_length=100)
