# listings/admin.py

from django.contrib import admin, messages
from django.utils.html import format_html

from core.results import best_effort

from .locales import english_text
from .models import ListingApplication, PersonalData, Property, PropertyData
from .tasks import dispatch_reformat_job


# === ADMIN FOR LISTING APPLICATION DRAFTS ===
@admin.register(ListingApplication)
class ListingApplicationAdmin(admin.ModelAdmin):
    list_display = (
        'reference_id',
        'user',
        'step',
        'name',
        'email',
        'city',
        'created_at'
    )
    list_filter = (
        'step',
        'type',
        'furnished_type',
        'created_at'
    )
    search_fields = (
        'reference_id',
        'user__username',
        'user__email',
        'name',
        'surname',
        'email',
        'address'
    )
    readonly_fields = ('reference_id', 'created_at', 'updated_at')
    fieldsets = (
        ("Draft", {
            "fields": ("reference_id", "user", "step")
        }),
        ("Personal Details", {
            "fields": ("name", "surname", "email", "phone")
        }),
        ("Location & Availability", {
            "fields": ("type", "city", "address", "postcode", "registration", "available_from", "available_to")
        }),
        ("Property Details", {
            "fields": (
                "size", "rent", "deposit", "bills", "flatmates", "period", "description",
                "pets_allowed", "smoking_allowed", "furnished_type", "shared_space",
                "bathrooms", "toilets", "amenities",
            )
        }),
        ("Images", {
            "fields": ("images",),
            "classes": ("collapse",)
        }),
        ("Metadata", {
            "fields": ("created_at", "updated_at"),
            "classes": ("collapse",)
        }),
    )


class PersonalDataInline(admin.StackedInline):
    model = PersonalData
    can_delete = False


class PropertyDataInline(admin.StackedInline):
    model = PropertyData
    can_delete = False


# === ADMIN FOR SUBMITTED PROPERTIES ===
@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    inlines = [PersonalDataInline, PropertyDataInline]

    def property_title(self, obj):
        data = getattr(obj, 'property_data', None)
        return english_text(data.title) if data else "Untitled Listing"
    property_title.short_description = "Title"

    def city(self, obj):
        data = getattr(obj, 'property_data', None)
        return data.city if data else "-"
    city.short_description = "City"

    def image_thumbnail(self, obj):
        data = getattr(obj, 'property_data', None)
        images = data.image_list() if data else []
        if not images:
            return "No"
        return format_html(
            '<img src="{}" style="width: 80px; height: 60px; object-fit: cover; border-radius: 4px;" />',
            images[0]
        )
    image_thumbnail.short_description = "Image"

    def public_link(self, obj):
        if not obj.link:
            return "-"
        return format_html('<a href="{}" target="_blank">{}</a>', obj.link, obj.slug or obj.link)
    public_link.short_description = "Link"

    list_display = (
        'id',
        'property_title',
        'city',
        'status',
        'approved',
        'image_thumbnail',
        'public_link',
        'created_at',
    )
    list_filter = ('status', 'approved', 'interface', 'created_at')
    search_fields = (
        'slug',
        'property_data__city',
        'property_data__address',
        'personal_data__email',
        'personal_data__name',
        'created_by__email',
    )
    readonly_fields = ('created_by', 'last_updated_by', 'created_at', 'updated_at')

    actions = ['reformat_descriptions']

    def reformat_descriptions(self, request, queryset):
        queued, failed = 0, []
        for prop in queryset:
            outcome = best_effort(
                dispatch_reformat_job,
                prop.pk,
                description='Reformat job dispatch',
                context={'property_id': prop.pk},
            )
            if outcome.ok:
                queued += 1
            else:
                failed.append(str(prop.pk))
        self.message_user(request, f"Queued description reformatting for {queued} propert{'y' if queued == 1 else 'ies'}.")
        if failed:
            self.message_user(
                request,
                f"Could not queue reformatting for properties: {', '.join(failed)}.",
                level=messages.ERROR,
            )

    reformat_descriptions.short_description = "Reformat and translate descriptions"
