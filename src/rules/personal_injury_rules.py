"""Personal Injury / Tort Rules.

Task catalogue for New York personal injury matters: municipal notice of
claim, pleadings, bill of particulars, note of issue, IME, Labor Law
analysis and settlement demand, plus statutes of limitation by claim type.
"""

from __future__ import annotations

from decimal import Decimal

from .rule_types import (
    DeadlineRule,
    FieldKind,
    FieldSpec,
    LimitationPeriod,
    LimitationsTable,
    PracticeArea,
    PracticeAreaId,
    TaskDefinition,
)


VENUE_COUNTIES = (
    "New York", "Kings", "Queens", "Bronx", "Richmond", "Nassau", "Suffolk", "Westchester",
)

# =============================================================================
# STATUTES OF LIMITATION
# =============================================================================

STATUTES_OF_LIMITATION = LimitationsTable(
    name="statutes_of_limitation",
    periods=(
        LimitationPeriod("general_negligence", Decimal("3"), "CPLR §214"),
        LimitationPeriod(
            "medical_malpractice", Decimal("2.5"), "CPLR §214-a",
            notes="From act or continuous treatment",
        ),
        LimitationPeriod("wrongful_death", Decimal("2"), "EPTL §5-4.1"),
        LimitationPeriod(
            "municipal_claim", Decimal("1"), "GML §50-i",
            notes="After Notice of Claim",
        ),
        LimitationPeriod("products_liability", Decimal("3"), "CPLR §214"),
    ),
)

CLAIM_TYPES = tuple(p.claim_type for p in STATUTES_OF_LIMITATION.periods)

# =============================================================================
# TASKS
# =============================================================================

PERSONAL_INJURY_TASKS = (
    TaskDefinition(
        task_id="pi-notice-of-claim",
        name="File Notice of Claim",
        description="File Notice of Claim against municipal entity",
        statute="General Municipal Law §50-e",
        deadline=DeadlineRule.fixed(90, "incident_date", "90 days from date of incident"),
        fields=(
            FieldSpec("incident_date", "Date of Incident", FieldKind.DATE, required=True),
            FieldSpec("municipality", "Municipality/Entity", required=True),
            FieldSpec("location", "Location of Incident", required=True),
            FieldSpec("description", "Description of Claim", FieldKind.TEXTAREA, required=True),
            FieldSpec("injuries", "Nature of Injuries", FieldKind.TEXTAREA, required=True),
            FieldSpec("damages", "Damages Claimed"),
        ),
        notes=(
            "Must be served on municipal clerk. Late notice may be excused under "
            "GML §50-e(5) for reasonable excuse and lack of prejudice."
        ),
    ),
    TaskDefinition(
        task_id="pi-summons-complaint",
        name="Draft Summons & Complaint",
        description="Prepare and file summons with complaint",
        statute="CPLR Article 3",
        deadline=DeadlineRule.advisory("Within statute of limitations (typically 3 years for PI)"),
        fields=(
            FieldSpec("plaintiff_name", "Plaintiff Name", required=True),
            FieldSpec("defendant_name", "Defendant Name", required=True),
            FieldSpec("venue", "Venue (County)", FieldKind.SELECT, required=True, options=VENUE_COUNTIES),
            FieldSpec("causes_of_action", "Causes of Action", FieldKind.TEXTAREA, required=True),
            FieldSpec("damages_sought", "Damages Sought"),
            FieldSpec("jury_demand", "Jury Demand", FieldKind.CHECKBOX),
            FieldSpec("claim_type", "Claim Type (Limitations)", FieldKind.SELECT, options=CLAIM_TYPES),
            FieldSpec("accrual_date", "Date Claim Accrued", FieldKind.DATE),
            FieldSpec("limitations_expiry", "Limitations Period Expires", FieldKind.DATE, readonly=True),
        ),
        notes="CPLR §304 - Action commenced by filing. Service must be made within 120 days (CPLR §306-b).",
    ),
    TaskDefinition(
        task_id="pi-bill-of-particulars",
        name="Prepare Bill of Particulars",
        description="Draft verified bill of particulars",
        statute="CPLR §3043",
        deadline=DeadlineRule.fixed(30, "demand_served_date", "30 days after demand served"),
        fields=(
            FieldSpec("demand_served_date", "Date Demand Served", FieldKind.DATE),
            FieldSpec("injuries_list", "List of Injuries", FieldKind.TEXTAREA, required=True),
            FieldSpec("medical_expenses", "Medical Expenses (to date)", FieldKind.NUMBER),
            FieldSpec("lost_wages", "Lost Wages", FieldKind.NUMBER),
            FieldSpec("permanency", "Permanent Injuries Claimed", FieldKind.TEXTAREA),
            FieldSpec(
                "serious_injury", "Serious Injury Category (No-Fault)", FieldKind.SELECT,
                options=(
                    "Significant disfigurement",
                    "Bone fracture",
                    "Permanent loss of use",
                    "Permanent consequential limitation",
                    "Significant limitation of use",
                    "90/180 day rule",
                ),
            ),
        ),
        notes="Must specify serious injury threshold category for motor vehicle cases (Insurance Law §5102(d)).",
    ),
    TaskDefinition(
        task_id="pi-note-of-issue",
        name="File Note of Issue",
        description="File note of issue and certificate of readiness",
        statute="CPLR §3402",
        deadline=DeadlineRule.advisory("After discovery complete, before trial"),
        fields=(
            FieldSpec("discovery_complete", "Discovery Complete", FieldKind.CHECKBOX, required=True),
            FieldSpec("physical_exams_complete", "Physical Exams Complete", FieldKind.CHECKBOX),
            FieldSpec("depositions_complete", "Depositions Complete", FieldKind.CHECKBOX),
            FieldSpec("expert_disclosure", "Expert Disclosure Filed", FieldKind.CHECKBOX),
        ),
        notes="Filing fee required. Case will be assigned to trial calendar.",
    ),
    TaskDefinition(
        task_id="pi-ime-prep",
        name="Prepare IME Documentation",
        description="Prepare client for Independent Medical Examination",
        statute="CPLR §3121",
        deadline=DeadlineRule.advisory("As scheduled by defense"),
        fields=(
            FieldSpec("ime_date", "IME Date", FieldKind.DATE, required=True),
            FieldSpec("ime_doctor", "Examining Doctor"),
            FieldSpec("ime_location", "Location"),
            FieldSpec("specialty", "Medical Specialty"),
            FieldSpec("records_provided", "Medical Records Provided", FieldKind.CHECKBOX),
        ),
        notes="Client should bring ID. Cannot have attorney present during exam.",
    ),
    TaskDefinition(
        task_id="pi-labor-law",
        name="Analyze Labor Law Claims",
        description="Evaluate Labor Law §§240, 241 applicability",
        statute="Labor Law §§240, 241, 200",
        fields=(
            FieldSpec("construction_site", "Construction Site", FieldKind.CHECKBOX),
            FieldSpec("elevation_related", "Elevation-Related Hazard", FieldKind.CHECKBOX),
            FieldSpec("gravity_related", "Gravity-Related Accident", FieldKind.CHECKBOX),
            FieldSpec("safety_devices", "Safety Devices Provided", FieldKind.TEXTAREA),
            FieldSpec("owner_gc", "Property Owner/GC"),
            FieldSpec("section_240", "§240(1) Scaffold Law Applies", FieldKind.CHECKBOX),
            FieldSpec("section_241", "§241(6) Industrial Code Applies", FieldKind.CHECKBOX),
        ),
        notes=(
            "Labor Law §240(1) imposes absolute liability on owners/GCs for elevation-related "
            "injuries. §241(6) requires violation of specific Industrial Code provision."
        ),
    ),
    TaskDefinition(
        task_id="pi-settlement-demand",
        name="Draft Settlement Demand",
        description="Prepare comprehensive settlement demand package",
        fields=(
            FieldSpec("policy_limits", "Policy Limits", FieldKind.NUMBER),
            FieldSpec("medical_specials", "Medical Specials", FieldKind.NUMBER, required=True),
            FieldSpec("lost_earnings", "Lost Earnings", FieldKind.NUMBER),
            FieldSpec("future_medicals", "Future Medical Expenses", FieldKind.NUMBER),
            FieldSpec("pain_suffering", "Pain & Suffering Demand", FieldKind.NUMBER),
            FieldSpec("total_demand", "Total Demand", FieldKind.NUMBER, required=True),
            FieldSpec("response_deadline", "Response Deadline", FieldKind.DATE),
        ),
    ),
)

PERSONAL_INJURY = PracticeArea(
    area_id=PracticeAreaId.PERSONAL_INJURY,
    name="Personal Injury",
    tasks=PERSONAL_INJURY_TASKS,
    tables={
        STATUTES_OF_LIMITATION.name: STATUTES_OF_LIMITATION,
    },
)
