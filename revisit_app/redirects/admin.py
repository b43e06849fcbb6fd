from django.contrib import admin

from .models import RedirectSetting


@admin.register(RedirectSetting)
class RedirectSettingAdmin(admin.ModelAdmin):
    list_display = ("name", "scope", "survey", "value", "updated_at")
    list_filter = ("scope", "name")
    search_fields = ("name", "survey__name", "survey__slug")
