from django.contrib import admin

from .models import Survey, SurveyAccessToken, SurveyQuestion, SurveyResponse


class SurveyQuestionInline(admin.TabularInline):
    model = SurveyQuestion
    extra = 0


@admin.register(Survey)
class SurveyAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "status", "visibility", "allow_edit_after_completion")
    prepopulated_fields = {"slug": ("name",)}
    inlines = [SurveyQuestionInline]


@admin.register(SurveyAccessToken)
class SurveyAccessTokenAdmin(admin.ModelAdmin):
    list_display = ("token", "survey", "completed", "expires_at")
    list_filter = ("survey",)
    search_fields = ("token", "email")


@admin.register(SurveyResponse)
class SurveyResponseAdmin(admin.ModelAdmin):
    list_display = ("id", "survey", "token", "language", "submitted_at")
    list_filter = ("survey",)
