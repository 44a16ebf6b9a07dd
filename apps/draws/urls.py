from django.urls import path, re_path

from . import views

urlpatterns = [
    path('', views.latest, name='default'),
    path('results', views.results, name='results'),
    path('results/latest', views.latest, name='latest'),
    re_path(r'^results/date/(?P<value>[^/]*)$', views.results_by_date, name='results_by_date'),
    re_path(r'^results/year/(?P<value>[^/]*)$', views.results_by_year, name='results_by_year'),
    re_path(r'^results/month/(?P<value>[^/]*)$', views.results_by_month, name='results_by_month'),
]
