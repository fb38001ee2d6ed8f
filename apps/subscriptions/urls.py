from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'subscriptions'

# No API root view: it would shadow the list route at the empty prefix
router = SimpleRouter()
router.register(r'', views.SubscriptionViewSet, basename='subscription')

urlpatterns = [
    # GET    /api/subscriptions/             - List own subscriptions (filterable)
    # POST   /api/subscriptions/             - Create subscription
    # GET    /api/subscriptions/categories/  - Category picker values
    # GET    /api/subscriptions/{id}/        - Get subscription
    # PUT    /api/subscriptions/{id}/        - Update subscription
    # PATCH  /api/subscriptions/{id}/        - Partial update
    # DELETE /api/subscriptions/{id}/        - Delete subscription
    path('', include(router.urls)),
]
