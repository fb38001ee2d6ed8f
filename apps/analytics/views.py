import logging

from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.subscriptions.serializers import SubscriptionFilterSerializer
from apps.subscriptions.services import InvalidBillingCycleError
from apps.subscriptions.views import FILTER_PARAMETERS
from .analytics import SpendAnalytics
from .serializers import (
    # Input serializers
    PeriodQuerySerializer,
    UpcomingQuerySerializer,
    # Response serializers
    SpendSummarySerializer,
    CategorySpendSerializer,
    UpcomingResponseSerializer,
    CalendarResponseSerializer,
    DashboardResponseSerializer,
    ErrorSerializer,
)


logger = logging.getLogger(__name__)


def invalid_cycle_response(error):
    """409 for records that still need migrate_billing_cycles."""
    logger.warning("Analytics blocked by unmigrated billing cycle %r", error.billing_cycle)
    return Response({'error': str(error)}, status=status.HTTP_409_CONFLICT)


def filter_criteria(request):
    """Validate list filters from query params."""
    filter_serializer = SubscriptionFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)
    return filter_serializer.to_criteria()


@extend_schema(
    parameters=FILTER_PARAMETERS,
    responses={
        200: SpendSummarySerializer,
        400: ErrorSerializer,
        409: ErrorSerializer,
    },
    description="Get total monthly, yearly and one-time spend for the current user.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def spend_summary(request):
    """Get spend totals - thin HTTP handler."""
    criteria = filter_criteria(request)

    try:
        data = SpendAnalytics.summary(
            request.user,
            today=timezone.localdate(),
            criteria=criteria
        )
    except InvalidBillingCycleError as e:
        return invalid_cycle_response(e)

    return Response(SpendSummarySerializer(data).data)


@extend_schema(
    parameters=FILTER_PARAMETERS,
    responses={
        200: CategorySpendSerializer(many=True),
        400: ErrorSerializer,
        409: ErrorSerializer,
    },
    description="Get recurring spend per category (pie chart data).",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def category_spend(request):
    """Get spend per category - thin HTTP handler."""
    criteria = filter_criteria(request)

    try:
        data = SpendAnalytics.categories(request.user, criteria=criteria)
    except InvalidBillingCycleError as e:
        return invalid_cycle_response(e)

    return Response(CategorySpendSerializer(data, many=True).data)


@extend_schema(
    parameters=[
        OpenApiParameter('days', OpenApiTypes.INT, description='Number of days ahead to include', default=7),
    ],
    responses={
        200: UpcomingResponseSerializer,
        400: ErrorSerializer,
    },
    description="Get subscriptions due within the next N days (overdue excluded).",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def upcoming_bills(request):
    """Get bills due soon - thin HTTP handler."""
    query_serializer = UpcomingQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    days = query_serializer.validated_data['days']

    today = timezone.localdate()
    results = SpendAnalytics.upcoming(request.user, today, days=days)

    serializer = UpcomingResponseSerializer(
        {'days': days, 'count': len(results), 'results': results},
        context={'request': request, 'today': today}
    )
    return Response(serializer.data)


@extend_schema(
    parameters=[
        OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM), defaults to current month'),
    ],
    responses={
        200: CalendarResponseSerializer,
        400: ErrorSerializer,
    },
    description="Get subscriptions grouped by due date for every day of a month.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def calendar_view(request):
    """Get the due-date calendar - thin HTTP handler."""
    today = timezone.localdate()

    query_serializer = PeriodQuerySerializer(
        data=request.query_params,
        context={'today': today}
    )
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    days = SpendAnalytics.calendar(
        request.user,
        start=params['start_date'],
        end=params['end_date']
    )

    serializer = CalendarResponseSerializer(
        {
            'period': params['period'],
            'start_date': params['start_date'],
            'end_date': params['end_date'],
            'days': days,
        },
        context={'request': request, 'today': today}
    )
    return Response(serializer.data)


@extend_schema(
    responses={
        200: DashboardResponseSerializer,
        409: ErrorSerializer,
    },
    description="Get dashboard data for the current user: totals, category breakdown and upcoming bills.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Get comprehensive dashboard data for current user."""
    today = timezone.localdate()

    try:
        data = SpendAnalytics.dashboard(request.user, today)
    except InvalidBillingCycleError as e:
        return invalid_cycle_response(e)

    serializer = DashboardResponseSerializer(
        data,
        context={'request': request, 'today': today}
    )
    return Response(serializer.data)
