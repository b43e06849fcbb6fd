from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db import models
from django.utils import timezone

User = get_user_model()


class Survey(models.Model):
    owner = models.ForeignKey(User, on_delete=models.CASCADE, related_name="surveys")
    name = models.CharField(max_length=255)
    slug = models.SlugField(unique=True)
    description = models.TextField(blank=True)
    # Base language plus per-language titles, e.g. {"fr": "Enquête"}
    language = models.CharField(max_length=10, default="en")
    title_translations = models.JSONField(default=dict, blank=True)
    allow_edit_after_completion = models.BooleanField(
        default=False,
        help_text="Participants may reopen and change their answers after submitting",
    )
    start_at = models.DateTimeField(null=True, blank=True)
    end_at = models.DateTimeField(null=True, blank=True)

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PUBLISHED = "published", "Published"
        CLOSED = "closed", "Closed"

    class Visibility(models.TextChoices):
        PUBLIC = "public", "Public"
        TOKEN = "token", "By invite token"

    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.DRAFT
    )
    visibility = models.CharField(
        max_length=20, choices=Visibility.choices, default=Visibility.TOKEN
    )
    created_at = models.DateTimeField(auto_now_add=True)

    def is_live(self) -> bool:
        now = timezone.now()
        time_ok = (self.start_at is None or self.start_at <= now) and (
            self.end_at is None or now <= self.end_at
        )
        return self.status == self.Status.PUBLISHED and time_ok

    def localized_title(self, language: str | None = None) -> str:
        if language and language != self.language:
            return self.title_translations.get(language) or self.name
        return self.name

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class SurveyQuestion(models.Model):
    class Types(models.TextChoices):
        TEXT = "text", "Free text"
        MULTIPLE_CHOICE_SINGLE = "mc_single", "Multiple choice (single)"
        MULTIPLE_CHOICE_MULTI = "mc_multi", "Multiple choice (multi)"
        YESNO = "yesno", "Yes/No"

    survey = models.ForeignKey(
        Survey, on_delete=models.CASCADE, related_name="questions"
    )
    # Short answer code, usable as a {CODE} placeholder
    code = models.CharField(max_length=64, blank=True)
    text = models.TextField()
    text_translations = models.JSONField(default=dict, blank=True)
    type = models.CharField(max_length=50, choices=Types.choices, default=Types.TEXT)
    options = models.JSONField(default=list, blank=True)
    required = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["order", "id"]

    @property
    def field_name(self) -> str:
        """Key under which answers to this question are stored on a response."""
        return str(self.id)

    def localized_text(self, language: str | None = None) -> str:
        if language:
            return self.text_translations.get(language) or self.text
        return self.text


class SurveyAccessToken(models.Model):
    # Values of ``completed`` that mean "not finished yet"
    INCOMPLETE_MARKERS = ("N", "")

    survey = models.ForeignKey(
        Survey, on_delete=models.CASCADE, related_name="access_tokens"
    )
    token = models.CharField(max_length=64)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    email = models.EmailField(blank=True)
    language = models.CharField(max_length=10, blank=True)
    # "N" or empty while outstanding, a completion timestamp (or "Y") once done
    completed = models.CharField(max_length=32, null=True, blank=True, default="N")
    attributes = models.JSONField(
        default=dict, blank=True, help_text="Custom participant attributes"
    )
    created_by = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="created_access_tokens"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    note = models.CharField(max_length=255, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["survey", "token"], name="uq_accesstoken_per_survey"
            )
        ]
        indexes = [
            models.Index(fields=["survey", "expires_at"], name="surveys_tok_survey_exp_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.token

    def is_complete(self) -> bool:
        return self.completed is not None and self.completed not in self.INCOMPLETE_MARKERS

    def is_valid(self) -> bool:
        if self.expires_at and timezone.now() > self.expires_at:
            return False
        if self.is_complete() and not self.survey.allow_edit_after_completion:
            return False
        return True

    def mark_completed(self) -> None:
        self.completed = timezone.now().strftime("%Y-%m-%d %H:%M")
        self.save(update_fields=["completed"])

    def token_attributes(self) -> dict[str, str]:
        """Participant attributes in a stable order, custom attributes last."""
        data = {
            "firstname": self.first_name,
            "lastname": self.last_name,
            "email": self.email,
            "token": self.token,
            "language": self.language,
            "completed": self.completed or "",
        }
        for name, value in (self.attributes or {}).items():
            data[str(name)] = "" if value is None else str(value)
        return data


class SurveyResponse(models.Model):
    survey = models.ForeignKey(
        Survey, on_delete=models.CASCADE, related_name="responses"
    )
    # Invite token string; re-submissions of editable surveys share it
    token = models.CharField(max_length=64, blank=True, db_index=True)
    language = models.CharField(max_length=10, blank=True)
    answers = models.JSONField(default=dict)
    submitted_at = models.DateTimeField(auto_now_add=True)
    submitted_by = models.ForeignKey(
        User,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="survey_responses",
    )

    class Meta:
        indexes = [
            models.Index(fields=["survey", "token"], name="surveys_resp_survey_tok_idx")
        ]
