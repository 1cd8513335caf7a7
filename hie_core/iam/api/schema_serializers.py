# hie_core/iam/api/schema_serializers.py
from __future__ import annotations

from rest_framework import serializers


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class SignUpRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, trim_whitespace=False)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")


class DetailResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()


class MenuItemSerializer(serializers.Serializer):
    title = serializers.CharField()
    url = serializers.CharField()


class ResolvedProfileSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(allow_null=True)
    email = serializers.CharField(allow_blank=True)
    role = serializers.CharField(allow_null=True)
    facility_id = serializers.IntegerField(allow_null=True)
    facility_name = serializers.CharField(allow_null=True)
    first_name = serializers.CharField(allow_blank=True)
    last_name = serializers.CharField(allow_blank=True)
    display_name = serializers.CharField(allow_blank=True)
    state = serializers.CharField()


class SessionBootstrapResponseSerializer(serializers.Serializer):
    profile = ResolvedProfileSerializer()
    landing_route = serializers.CharField()
    sidebar_label = serializers.CharField()
    menu = MenuItemSerializer(many=True)
    server_time = serializers.DateTimeField()
    api_version = serializers.CharField()


class RouteAuthorizeRequestSerializer(serializers.Serializer):
    path = serializers.CharField(max_length=255)


class RouteAuthorizeResponseSerializer(serializers.Serializer):
    path = serializers.CharField()
    outcome = serializers.CharField()
    redirect_to = serializers.CharField(allow_null=True)
