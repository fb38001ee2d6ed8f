"""
Domain exceptions for analytics app.

This module defines domain-specific exceptions that are raised by the
analytics services layer. These exceptions represent business rule
violations and invalid operations, separate from HTTP concerns.

Exception Hierarchy:
    AnalyticsServiceError (base)
    └── InvalidPeriodError

Stored records with a legacy billing cycle surface as
``apps.subscriptions.services.InvalidBillingCycleError``; views report
those as 409 Conflict.

Usage:
    from apps.analytics.exceptions import InvalidPeriodError

    try:
        start, end = parse_period(request.query_params['period'])
    except InvalidPeriodError as e:
        return Response({'error': str(e)}, status=400)
"""


class AnalyticsServiceError(Exception):
    """
    Base exception for all analytics service errors.

    All domain-specific exceptions in the analytics app inherit from this
    class, making it easy to catch all analytics errors in views:

        try:
            start, end = parse_period('2025-13')
        except AnalyticsServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidPeriodError(AnalyticsServiceError):
    """
    Raised when period format is invalid.

    Period must be in YYYY-MM format (e.g., '2025-01').

    Example:
        raise InvalidPeriodError("Invalid period format. Use YYYY-MM")
    """

    pass
