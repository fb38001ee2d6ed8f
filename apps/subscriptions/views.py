from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import Subscription
from .permissions import IsSubscriptionOwner
from .serializers import (
    SubscriptionSerializer,
    SubscriptionFilterSerializer,
    CategoryListSerializer,
)
from .services import (
    get_user_subscriptions,
    create_subscription,
    update_subscription,
    delete_subscription,
    get_user_categories,
    get_suggested_categories,
)


FILTER_PARAMETERS = [
    OpenApiParameter('categories', str, description='Comma-separated categories'),
    OpenApiParameter('billing_cycles', str, description='Comma-separated billing cycles'),
    OpenApiParameter('frequencies', str, description='Comma-separated frequencies'),
    OpenApiParameter('min_amount', float, description='Minimum amount (inclusive)'),
    OpenApiParameter('max_amount', float, description='Maximum amount (inclusive)'),
]


class SubscriptionPagination(PageNumberPagination):
    """Custom pagination for subscriptions."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class SubscriptionViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Subscription CRUD operations.

    list: Get own subscriptions (filterable, ordered by next due date)
    create: Create a new subscription
    retrieve: Get a specific subscription
    update: Update a subscription
    destroy: Delete a subscription
    categories: Get categories for the category picker
    """

    queryset = Subscription.objects.none()
    serializer_class = SubscriptionSerializer
    permission_classes = [IsAuthenticated, IsSubscriptionOwner]
    pagination_class = SubscriptionPagination

    def get_queryset(self):
        """Own subscriptions only; list filters come from query params."""
        user = self.request.user
        if getattr(self, 'swagger_fake_view', False):
            return Subscription.objects.none()

        if self.action != 'list':
            # Others' records are simply not found
            return get_user_subscriptions(user=user)

        filter_serializer = SubscriptionFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return get_user_subscriptions(user=user, criteria=filter_serializer.to_criteria())

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['today'] = timezone.localdate()
        return context

    @extend_schema(parameters=FILTER_PARAMETERS)
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def perform_create(self, serializer):
        serializer.instance = create_subscription(
            user=self.request.user,
            **serializer.validated_data
        )

    def perform_update(self, serializer):
        serializer.instance = update_subscription(
            subscription=serializer.instance,
            **serializer.validated_data
        )

    def perform_destroy(self, instance):
        delete_subscription(subscription=instance)

    @extend_schema(
        responses={200: CategoryListSerializer},
        description="User's categories merged with common ones, plus the suggested list.",
    )
    @action(detail=False, methods=['get'])
    def categories(self, request):
        """
        Get categories for the category picker.

        GET /api/subscriptions/categories/
        """
        serializer = CategoryListSerializer({
            'categories': get_user_categories(user=request.user),
            'suggested': get_suggested_categories(),
        })
        return Response(serializer.data)
