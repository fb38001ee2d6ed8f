"""
Custom permission classes for subscriptions app.

Subscriptions are private: only the owner may see or change one.
"""
from rest_framework.permissions import BasePermission

from .services.exceptions import SubscriptionAccessDeniedError


class IsSubscriptionOwner(BasePermission):
    """
    Permission to access a subscription.

    Non-owners get 404 rather than 403 so record ids don't leak.

    Usage:
        class SubscriptionViewSet(viewsets.ModelViewSet):
            permission_classes = [IsAuthenticated, IsSubscriptionOwner]
    """

    message = 'Subscription not found.'

    def has_object_permission(self, request, view, obj):
        """Check if user owns the subscription."""
        if obj.user_id != request.user.id:
            raise SubscriptionAccessDeniedError()
        return True
