from rest_framework import permissions, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.generics import get_object_or_404
from rest_framework.response import Response
from rest_framework.views import APIView

from revisit_app.redirects.lookups import get_resolver
from revisit_app.redirects.options import OPTIONS
from revisit_app.surveys.models import Survey
from revisit_app.surveys.permissions import can_edit_survey


class CanEditSurvey(permissions.BasePermission):
    """Object-level permission that mirrors SSR rules using surveys.permissions."""

    def has_object_permission(self, request, view, obj):
        return can_edit_survey(request.user, obj)


class RedirectSettingsSerializer(serializers.Serializer):
    settings = serializers.DictField(child=serializers.JSONField())

    def validate_settings(self, value):
        unknown = sorted(
            name
            for name in value
            if name not in OPTIONS or not OPTIONS[name].survey_form
        )
        if unknown:
            raise serializers.ValidationError(
                f"Unknown survey redirect options: {', '.join(unknown)}"
            )
        return value


class RedirectSettingsView(APIView):
    """Survey redirect options: schema with current values (GET), apply (PUT)."""

    permission_classes = [permissions.IsAuthenticated, CanEditSurvey]

    def get_survey(self, pk):
        survey = get_object_or_404(Survey, pk=pk)
        self.check_object_permissions(self.request, survey)
        return survey

    def get(self, request, pk):
        survey = self.get_survey(pk)
        schema = get_resolver().survey_form_schema(survey.id)
        return Response({"survey": survey.id, "settings": schema})

    def put(self, request, pk):
        survey = self.get_survey(pk)
        serializer = RedirectSettingsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        resolver = get_resolver()
        resolver.apply(survey.id, serializer.validated_data["settings"])
        return Response({"survey": survey.id, "settings": resolver.survey_form_schema(survey.id)})


@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def healthcheck(request):
    return Response({"status": "ok"})
