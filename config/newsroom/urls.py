from django.urls import path

from . import views

app_name = 'newsroom'

urlpatterns = [
    path('', views.home, name='home'),
    path('search/', views.search, name='search'),
    path('news/<slug:slug>/', views.article_detail, name='article_detail'),
    path('category/<slug:slug>/', views.category_detail, name='category_detail'),
    path('author/<int:pk>/', views.author_detail, name='author_detail'),
    # View-tracking API used by article pages
    path('api/views/cancel/<str:task_id>/', views.cancel_view, name='cancel_view'),
    path('api/views/<slug:slug>/', views.track_view, name='track_view'),
    # Reader engagement
    path('news/<slug:slug>/comments/', views.add_comment, name='add_comment'),
    path('api/reactions/<slug:slug>/', views.react, name='react'),
    # Staff dashboard
    path('dashboard/', views.dashboard, name='dashboard'),
    path('dashboard/comments/', views.dashboard_comments, name='dashboard_comments'),
    path('dashboard/comments/<int:pk>/', views.dashboard_comment_moderate, name='dashboard_comment_moderate'),
    path('dashboard/articles/', views.dashboard_article_list, name='dashboard_article_list'),
    path('dashboard/articles/new/', views.dashboard_article_create, name='dashboard_article_create'),
    path('dashboard/articles/<int:pk>/edit/', views.dashboard_article_edit, name='dashboard_article_edit'),
    # Category-style URLs (keep last so explicit routes are matched first)
    path('<slug:category>/', views.category_detail_by_segment, name='category_segment'),
    path('<slug:category>/<slug:slug>/', views.category_article_detail, name='category_article_detail'),
]
