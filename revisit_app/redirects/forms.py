from django import forms

from .options import OPTIONS


class SurveyRedirectSettingsForm(forms.Form):
    """Per-survey redirect options; fields are generated from the option registry."""

    def __init__(self, *args, schema=None, **kwargs):
        super().__init__(*args, **kwargs)
        schema = schema or {}
        for spec in OPTIONS.values():
            if not spec.survey_form:
                continue
            entry = schema.get(spec.name, {})
            if spec.type == "boolean":
                field = forms.BooleanField(required=False, label=spec.label)
            else:
                field = forms.CharField(
                    required=False,
                    max_length=2048,
                    label=spec.label,
                    widget=forms.TextInput(
                        attrs={"placeholder": entry.get("placeholder", spec.placeholder)}
                    ),
                )
            field.initial = entry.get("current", spec.default)
            self.fields[spec.name] = field

    def clean_redirectUrl(self):
        return (self.cleaned_data.get("redirectUrl") or "").strip()
