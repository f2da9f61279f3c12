"""Tests for female sterilization and vasectomy readiness.

Tests cover:
- A/C/D/S resolution on the built-in tables (most restrictive wins)
- Reasons quoting answered values (blood pressure, haemoglobin, BMI)
- Counselling confirmation and STI advisories
- The permanent-contraception gate of the vasectomy form
"""

from __future__ import annotations

import pytest

from src.catalog.sterilization import MALE_MANDATORY_ALERTS, MALE_STI_ADVISORY
from src.eligibility import evaluate_female_sterilization, evaluate_male_sterilization
from src.eligibility.sterilization import NO_RESTRICTIONS, female_form, male_form
from src.errors import InvalidAnswer, UnknownQuestion
from src.models.enums import SterilizationCategory


def _female(**overrides: object) -> dict[str, object]:
    """A complete female session with no restricting condition."""
    answers: dict[str, object] = {
        "fs-currently-pregnant": False,
        "fs-unexplained-vaginal-bleeding": False,
        "fs-systemic-infection": False,
        "fs-is-postpartum": False,
        "fs-is-post-abortion": False,
        "fs-bp-systolic": 118,
        "fs-bp-diastolic": 76,
        "fs-vascular-disease": False,
        "fs-ischemic-heart-disease": False,
        "fs-history-of-stroke": False,
        "fs-valvular-disease": "none",
        "fs-acute-dvt-pe": False,
        "fs-on-anticoagulant": False,
        "fs-hiv-status": "negative",
        "fs-has-sle": False,
        "fs-has-diabetes": False,
        "fs-thyroid-disorder": "none",
        "fs-haemoglobin": 12.5,
        "fs-coagulation-disorder": False,
        "fs-acute-respiratory": False,
        "fs-chronic-lung-disease": False,
        "fs-gynecologic-cancer": False,
        "fs-endometriosis": False,
        "fs-previous-abdominal-surgery": False,
        "fs-weight": 60,
        "fs-height": 165,
        "fs-fixed-uterus": False,
        "fs-sti-risk": False,
        "fs-understands-permanence": True,
        "fs-alternatives-discussed": True,
        "fs-informed-consent": True,
    }
    answers.update({k.replace("_", "-"): v for k, v in overrides.items()})
    return answers


def _male(**overrides: object) -> dict[str, object]:
    """A complete vasectomy session with no restricting condition."""
    answers: dict[str, object] = {
        "ms-desires-permanent-contraception": True,
        "ms-age": 38,
        "ms-depressive-disorder": False,
        "ms-hiv-positive": False,
        "ms-has-diabetes": False,
        "ms-sickle-cell-disease": False,
        "ms-local-infection": False,
        "ms-systemic-infection": False,
        "ms-coagulation-disorder": False,
        "ms-previous-scrotal-injury": False,
        "ms-large-varicocele": False,
        "ms-large-hydrocele": False,
        "ms-filariasis": False,
        "ms-intrascrotal-mass": False,
        "ms-cryptorchidism": False,
        "ms-inguinal-hernia": False,
    }
    answers.update({k.replace("_", "-"): v for k, v in overrides.items()})
    return answers


class TestBuiltInForms:
    """The shipped tables build."""

    def test_forms_build(self) -> None:
        assert len(female_form().rules) > 30
        assert len(male_form().rules) > 10

    def test_clear_sessions_are_complete(self) -> None:
        assert female_form().is_complete(female_form().validate(_female()))
        assert male_form().is_complete(male_form().validate(_male()))


class TestFemaleSterilization:
    """Female sterilization readiness."""

    def test_no_condition_accepts(self) -> None:
        result = evaluate_female_sterilization(_female())
        assert result.category == SterilizationCategory.ACCEPT
        assert result.label == "Accept - Proceed"
        assert result.reasons == ()
        assert result.complete is True
        assert result.counselling_confirmed is True
        assert result.sti_advisory is None
        assert not result.referral_required
        assert not result.temporary_contraception_recommended

    def test_most_restrictive_wins(self) -> None:
        result = evaluate_female_sterilization(
            _female(fs_currently_pregnant=True, fs_previous_abdominal_surgery=True)
        )
        assert result.category == SterilizationCategory.DELAY
        assert result.reasons == ("Currently pregnant", "Previous abdominal or pelvic surgery")
        assert result.temporary_contraception_recommended

    def test_severe_hypertension_refers(self) -> None:
        result = evaluate_female_sterilization(_female(fs_bp_systolic=165, fs_bp_diastolic=95))
        assert result.category == SterilizationCategory.SPECIAL
        assert result.referral_required
        assert result.reasons[0] == "Severe hypertension (BP: 165/95 mmHg)"
        assert "Moderate hypertension (BP: 165/95 mmHg)" in result.reasons

    def test_moderate_hypertension(self) -> None:
        result = evaluate_female_sterilization(_female(fs_bp_systolic=145, fs_bp_diastolic=85))
        assert result.category == SterilizationCategory.CAUTION
        assert result.reasons == ("Moderate hypertension (BP: 145/85 mmHg)",)

    @pytest.mark.parametrize(
        ("days", "expected"),
        [
            (3, SterilizationCategory.ACCEPT),
            (7, SterilizationCategory.DELAY),
            (41, SterilizationCategory.DELAY),
            (42, SterilizationCategory.ACCEPT),
        ],
    )
    def test_postpartum_timing(self, days: int, expected: SterilizationCategory) -> None:
        result = evaluate_female_sterilization(_female(
            fs_is_postpartum=True,
            fs_days_since_delivery=days,
            fs_severe_preeclampsia=False,
            fs_severe_postpartum_hemorrhage=False,
            fs_uterine_rupture=False,
        ))
        assert result.category == expected
        assert result.complete

    def test_post_abortion_perforation(self) -> None:
        result = evaluate_female_sterilization(_female(
            fs_is_post_abortion=True,
            fs_abortion_complications=True,
            fs_uterine_perforation=True,
            fs_other_abortion_complications=False,
        ))
        assert result.category == SterilizationCategory.SPECIAL

    def test_post_abortion_uncomplicated(self) -> None:
        result = evaluate_female_sterilization(
            _female(fs_is_post_abortion=True, fs_abortion_complications=False)
        )
        assert result.category == SterilizationCategory.ACCEPT
        assert result.reasons == ("Post-abortion without complications",)

    def test_severe_anaemia_quotes_haemoglobin(self) -> None:
        result = evaluate_female_sterilization(_female(fs_haemoglobin=6.5))
        assert result.category == SterilizationCategory.DELAY
        assert result.reasons == ("Severe anaemia (Hb: 6.5 g/dL)",)

    def test_moderate_anaemia(self) -> None:
        result = evaluate_female_sterilization(_female(fs_haemoglobin=8))
        assert result.category == SterilizationCategory.CAUTION

    def test_obesity_from_weight_and_height(self) -> None:
        result = evaluate_female_sterilization(_female(fs_weight=95, fs_height=165))
        assert result.category == SterilizationCategory.CAUTION
        assert result.reasons == ("BMI ≥30 (34.9)",)

    def test_sle_with_complications(self) -> None:
        result = evaluate_female_sterilization(_female(fs_has_sle=True, fs_sle_complications=True))
        assert result.category == SterilizationCategory.SPECIAL

    def test_sti_risk_is_advisory_only(self) -> None:
        result = evaluate_female_sterilization(_female(fs_sti_risk=True))
        assert result.category == SterilizationCategory.ACCEPT
        assert "does NOT protect against STIs" in result.sti_advisory

    def test_counselling_not_confirmed(self) -> None:
        result = evaluate_female_sterilization(_female(fs_informed_consent=False))
        assert result.counselling_confirmed is False

    def test_partial_session(self) -> None:
        result = evaluate_female_sterilization({"fs-endometriosis": True})
        assert result.category == SterilizationCategory.SPECIAL
        assert result.complete is False
        assert result.counselling_confirmed is False

    def test_follow_up_needs_parent(self) -> None:
        with pytest.raises(InvalidAnswer, match="does not apply"):
            evaluate_female_sterilization({"fs-days-since-delivery": 10})

    def test_unknown_question(self) -> None:
        with pytest.raises(UnknownQuestion):
            evaluate_female_sterilization({"ms-age": 40})


class TestMaleSterilization:
    """Vasectomy readiness."""

    def test_no_condition_accepts(self) -> None:
        result = evaluate_male_sterilization(_male())
        assert result.category == SterilizationCategory.ACCEPT
        assert result.label == "Accept - Procedure can proceed"
        assert result.reasons == (NO_RESTRICTIONS,)
        assert result.counselling_alerts == MALE_MANDATORY_ALERTS
        assert result.sti_advisory == MALE_STI_ADVISORY
        assert result.complete

    def test_no_wish_for_permanent_method(self) -> None:
        result = evaluate_male_sterilization(
            _male(ms_desires_permanent_contraception=False, ms_cryptorchidism=True)
        )
        assert result.label == "Not Eligible"
        assert result.category == SterilizationCategory.DELAY
        assert result.temporary_contraception_recommended
        assert not result.referral_required
        assert result.reasons == ("Does not desire permanent contraception",)

    def test_young_age_needs_counselling(self) -> None:
        result = evaluate_male_sterilization(_male(ms_age=25))
        assert result.category == SterilizationCategory.CAUTION
        assert result.reasons == ("Young age (25 years)",)
        assert result.counselling_alerts[0].startswith("Young men should be counselled")
        assert result.counselling_alerts[-2:] == MALE_MANDATORY_ALERTS

    def test_local_infection_delays(self) -> None:
        result = evaluate_male_sterilization(
            _male(ms_local_infection=True, ms_infection_type="epididymitis")
        )
        assert result.category == SterilizationCategory.DELAY
        assert result.reasons == ("Local genital infection (epididymitis)",)
        assert "Delay procedure until infection treated." in result.counselling_alerts
        assert result.temporary_contraception_recommended

    @pytest.mark.parametrize(
        ("stage", "expected"),
        [("stage-2", SterilizationCategory.ACCEPT), ("stage-3", SterilizationCategory.SPECIAL)],
    )
    def test_hiv_stage(self, stage: str, expected: SterilizationCategory) -> None:
        result = evaluate_male_sterilization(_male(ms_hiv_positive=True, ms_who_hiv_stage=stage))
        assert result.category == expected
        assert result.referral_required is (expected == SterilizationCategory.SPECIAL)

    def test_uncontrolled_diabetes(self) -> None:
        result = evaluate_male_sterilization(
            _male(ms_has_diabetes=True, ms_diabetes_controlled=False)
        )
        assert result.category == SterilizationCategory.CAUTION
        assert "Recommend referral for glucose optimization before procedure." in (
            result.counselling_alerts
        )

    def test_structural_conditions(self) -> None:
        result = evaluate_male_sterilization(
            _male(ms_large_hydrocele=True, ms_filariasis=True, ms_inguinal_hernia=True)
        )
        assert result.category == SterilizationCategory.SPECIAL
        assert result.reasons == (
            "Large hydrocele",
            "Filariasis (elephantiasis)",
            "Inguinal hernia (special setting required)",
        )

    def test_age_below_range(self) -> None:
        with pytest.raises(InvalidAnswer, match="between 18 and 70"):
            evaluate_male_sterilization(_male(ms_age=17))
