from rest_framework import serializers
from .models import User, AuthProvider


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'auth_provider',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'auth_provider', 'created_at', 'last_login']


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ProviderSignInSerializer(serializers.Serializer):
    """Identity already verified by an external provider handshake."""

    provider = serializers.ChoiceField(
        choices=[c for c in AuthProvider.choices if c[0] != AuthProvider.EMAIL]
    )
    subject = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
