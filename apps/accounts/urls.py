from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # User profile
    path('user/', views.get_current_user, name='current-user'),
    path('user/update/', views.update_profile, name='update-profile'),
    path('user/delete/', views.delete_account, name='delete-account'),
    path('users/<uuid:pk>/', views.UserDetailView.as_view(), name='user-detail'),
]
