from django.urls import path
from . import views

app_name = 'friends'

urlpatterns = [
    path('', views.friendships, name='friendships'),
    path('<uuid:friendship_id>/accept/', views.accept_friendship, name='accept'),
    path('<uuid:friendship_id>/', views.remove_friendship, name='remove'),
]
