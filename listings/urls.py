# listings/urls.py

from django.urls import path

from . import views

urlpatterns = [
    # Step validation (anonymous or authenticated)
    path('validate/step-<int:step>/', views.validate_step_view, name='listing-application-validate-step'),
    path('save/', views.save_listing_application, name='listing-application-save'),

    # Authenticated
    path('submit/', views.submit_listing_application_view, name='listing-application-submit'),
    path('list/', views.list_listing_applications, name='listing-application-list'),
    path('edit/', views.edit_listing_application, name='listing-application-edit'),
    path('delete/', views.delete_listing_application, name='listing-application-delete'),

    # Admin
    path('list-extended/', views.list_all_listing_applications, name='listing-application-list-all'),

    path('<str:reference_id>/', views.show_listing_application, name='listing-application-show'),
]
