import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse

from revisit_app.surveys.fieldmap import short_field_map
from revisit_app.surveys.models import (
    Survey,
    SurveyAccessToken,
    SurveyQuestion,
    SurveyResponse,
)

User = get_user_model()


@pytest.fixture
def owner():
    return User.objects.create_user(username="owner", password="pass")


@pytest.fixture
def survey(owner):
    survey = Survey.objects.create(
        owner=owner,
        name="Exit poll",
        slug="exit-poll",
        status=Survey.Status.PUBLISHED,
        title_translations={"fr": "Sondage"},
    )
    SurveyQuestion.objects.create(
        survey=survey, code="name", text="Name?", text_translations={"fr": "Nom ?"}, order=1
    )
    SurveyQuestion.objects.create(
        survey=survey,
        code="colours",
        text="Colours?",
        type=SurveyQuestion.Types.MULTIPLE_CHOICE_MULTI,
        options=["red", "blue"],
        order=2,
    )
    return survey


@pytest.mark.django_db
def test_token_submission_completes_token(client, survey, owner):
    tok = SurveyAccessToken.objects.create(
        survey=survey, token="T1", created_by=owner, language="fr"
    )
    name_q, colours_q = survey.questions.all()
    url = reverse("surveys:take_token", kwargs={"slug": survey.slug, "token": "T1"})

    resp = client.get(url)
    assert resp.status_code == 200
    assert b"Sondage" in resp.content

    resp = client.post(
        url,
        {f"q_{name_q.id}": "Jane", f"q_{colours_q.id}": ["red", "blue"], "lang": "fr"},
    )
    assert resp.status_code == 302
    assert resp["Location"] == reverse("surveys:thank_you", kwargs={"slug": survey.slug})

    response = SurveyResponse.objects.get(survey=survey)
    assert response.token == "T1"
    assert response.language == "fr"
    assert response.answers == {name_q.field_name: "Jane", colours_q.field_name: ["red", "blue"]}

    tok.refresh_from_db()
    assert tok.is_complete()
    assert not tok.is_valid()

    # One-time use: without a redirect configured the invite is refused
    assert client.get(url).status_code == 404


@pytest.mark.django_db
def test_thank_you_page(client, survey):
    resp = client.get(reverse("surveys:thank_you", kwargs={"slug": survey.slug}))
    assert resp.status_code == 200
    assert b"Thank you" in resp.content


@pytest.mark.django_db
def test_public_survey_takes_anonymous_response(client, survey):
    survey.visibility = Survey.Visibility.PUBLIC
    survey.save()
    name_q = survey.questions.first()
    url = reverse("surveys:take", kwargs={"slug": survey.slug})
    resp = client.post(url, {f"q_{name_q.id}": "Anon"})
    assert resp.status_code == 302
    assert SurveyResponse.objects.get(survey=survey).token == ""


@pytest.mark.django_db
def test_token_route_refuses_public_survey(client, survey, owner):
    survey.visibility = Survey.Visibility.PUBLIC
    survey.save()
    SurveyAccessToken.objects.create(survey=survey, token="T1", created_by=owner)
    url = reverse("surveys:take_token", kwargs={"slug": survey.slug, "token": "T1"})
    assert client.get(url).status_code == 404


@pytest.mark.django_db
def test_draft_survey_is_not_available(client, survey):
    survey.status = Survey.Status.DRAFT
    survey.save()
    resp = client.get(reverse("surveys:take", kwargs={"slug": survey.slug}))
    assert resp.status_code == 404


@pytest.mark.django_db
class TestAccessTokenModel:
    @pytest.mark.parametrize(
        "completed, expected",
        [("N", False), ("", False), (None, False), ("Y", True), ("2026-10-01 09:30", True)],
    )
    def test_is_complete(self, survey, owner, completed, expected):
        tok = SurveyAccessToken(survey=survey, token="X", created_by=owner, completed=completed)
        assert tok.is_complete() is expected

    def test_completed_token_valid_when_editable(self, survey, owner):
        survey.allow_edit_after_completion = True
        tok = SurveyAccessToken(survey=survey, token="X", created_by=owner, completed="Y")
        assert tok.is_valid()

    def test_token_attributes_order(self, survey, owner):
        tok = SurveyAccessToken(
            survey=survey,
            token="X",
            created_by=owner,
            first_name="Ada",
            completed=None,
            attributes={"attribute_1": 5, "note": None},
        )
        attrs = tok.token_attributes()
        assert list(attrs) == [
            "firstname",
            "lastname",
            "email",
            "token",
            "language",
            "completed",
            "attribute_1",
            "note",
        ]
        assert attrs["attribute_1"] == "5"
        assert attrs["note"] == ""
        assert attrs["completed"] == ""


@pytest.mark.django_db
def test_short_field_map_uses_codes_and_language(survey):
    name_q, colours_q = survey.questions.all()
    entries = short_field_map(survey, "fr")
    assert entries[0] == {"fieldname": name_q.field_name, "title": "name", "question": "Nom ?"}
    assert entries[1]["title"] == "colours"
