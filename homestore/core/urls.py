from django.urls import path
from .views import (
    CustomTokenObtainPairView, CustomTokenRefreshView, user_me,
    user_list_create, user_detail,
    notification_list, notification_mark_read, notification_mark_all_read,
    inbox_list, inbox_mark_read, inbox_delete,
    global_search
)

urlpatterns = [
    # Auth endpoints
    path('auth/login/', CustomTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/refresh/', CustomTokenRefreshView.as_view(), name='token_refresh'),
    path('auth/me/', user_me, name='user-me'),

    # User endpoints
    path('users/', user_list_create, name='user-list-create'),
    path('users/<int:pk>/', user_detail, name='user-detail'),

    # Notification endpoints
    path('notifications/', notification_list, name='notification-list'),
    path('notifications/read-all/', notification_mark_all_read, name='notification-mark-all-read'),
    path('notifications/<int:pk>/read/', notification_mark_read, name='notification-mark-read'),

    # Inbox endpoints
    path('inbox/', inbox_list, name='inbox-list'),
    path('inbox/<int:pk>/read/', inbox_mark_read, name='inbox-mark-read'),
    path('inbox/<int:pk>/', inbox_delete, name='inbox-delete'),

    # Global search endpoint
    path('search/', global_search, name='global-search'),
]
