"""Contraceptive methods evaluated by the eligibility engine.

Declaration order is significant: it breaks ties between methods of the
same category in the final result list.
"""

from __future__ import annotations

from typing import Any

# Method ids, grouped the way the rule tables refer to them
COC = "coc"
CIC = "cic"
POP = "pop"
DMPA = "dmpa"
IMPLANT = "implant"
CU_IUD = "cu-iud"
LNG_IUD = "lng-iud"
FEMALE_STERILIZATION = "female-sterilization"
PATCH = "patch"
BARRIER = "barrier"
RING = "ring"
MALE_CONDOM = "male-condom"
FEMALE_CONDOM = "female-condom"
DIAPHRAGM = "diaphragm"
MALE_STERILIZATION = "male-sterilization"
SDM = "sdm"
CALENDAR = "calendar"

COMBINED = (COC, CIC, PATCH, RING)
PROGESTIN_ONLY = (POP, DMPA, IMPLANT)
IUDS = (CU_IUD, LNG_IUD)
STERILIZATION = (FEMALE_STERILIZATION, MALE_STERILIZATION)
FERTILITY_AWARENESS = (SDM, CALENDAR)
HORMONAL = (COC, CIC, POP, DMPA, IMPLANT, LNG_IUD, PATCH, RING)

METHOD_DEFINITIONS: list[dict[str, Any]] = [
    {
        "id": COC,
        "name": "Combined oral contraceptive (COC)",
        "short_name": "COC",
        "family": "hormonal",
        "frequency": "daily",
        "regular_bleeding": True,
    },
    {
        "id": CIC,
        "name": "Combined injectable contraceptive",
        "short_name": "CIC",
        "family": "hormonal",
        "frequency": "monthly",
    },
    {
        "id": POP,
        "name": "Progestin only pill (POP)",
        "short_name": "POP",
        "family": "hormonal",
        "frequency": "daily",
    },
    {
        "id": DMPA,
        "name": "DMPA injection",
        "short_name": "DMPA",
        "family": "hormonal",
        "frequency": "every-3-months",
    },
    {
        "id": IMPLANT,
        "name": "Implant",
        "short_name": "Implant",
        "family": "hormonal",
        "frequency": "every-3-years",
    },
    {
        "id": CU_IUD,
        "name": "Copper IUD",
        "short_name": "Cu-IUD",
        "family": "non_hormonal",
        "frequency": "every-8-years",
    },
    {
        "id": LNG_IUD,
        "name": "LNG IUD",
        "short_name": "LNG-IUD",
        "family": "hormonal",
        "frequency": "every-8-years",
    },
    {
        "id": FEMALE_STERILIZATION,
        "name": "Female sterilization",
        "short_name": "Tubal ligation",
        "family": "permanent",
    },
    {
        "id": PATCH,
        "name": "Combined patch",
        "short_name": "Patch",
        "family": "hormonal",
        "frequency": "every-3-weeks",
        "regular_bleeding": True,
    },
    {
        "id": BARRIER,
        "name": "Barrier method (general)",
        "short_name": "Barrier",
        "family": "barrier",
        "protects_against_sti": True,
        "regular_bleeding": True,
    },
    {
        "id": RING,
        "name": "Vaginal ring",
        "short_name": "Ring",
        "family": "hormonal",
        "frequency": "every-3-weeks",
        "regular_bleeding": True,
    },
    {
        "id": MALE_CONDOM,
        "name": "Male condom",
        "short_name": "Male condom",
        "family": "barrier",
        "protects_against_sti": True,
    },
    {
        "id": FEMALE_CONDOM,
        "name": "Female condom",
        "short_name": "Female condom",
        "family": "barrier",
        "protects_against_sti": True,
    },
    {
        "id": DIAPHRAGM,
        "name": "Diaphragm",
        "short_name": "Diaphragm",
        "family": "barrier",
    },
    {
        "id": MALE_STERILIZATION,
        "name": "Male sterilization",
        "short_name": "Vasectomy",
        "family": "permanent",
    },
    {
        "id": SDM,
        "name": "Standard Days Method",
        "short_name": "SDM",
        "family": "fertility_awareness",
        "calculator": "standard_days",
    },
    {
        "id": CALENDAR,
        "name": "Calendar Method",
        "short_name": "Calendar",
        "family": "fertility_awareness",
        "calculator": "calendar",
    },
]
