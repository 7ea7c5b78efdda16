"""Criminal Defense Rules.

Task catalogue for New York criminal defense: arraignment, omnibus and
suppression motions, CPL 245 discovery, bail, CPL §30.30 speedy trial and
youthful offender eligibility, plus the §30.30 readiness budgets.
"""

from __future__ import annotations

from .rule_types import (
    DeadlineRule,
    FieldKind,
    FieldSpec,
    PracticeArea,
    PracticeAreaId,
    TaskDefinition,
    TimeBudget,
    TimeBudgetTable,
    TimeUnit,
)


# =============================================================================
# SPEEDY TRIAL (CPL §30.30)
# =============================================================================

# Felonies are budgeted in months, lesser charges in days
SPEEDY_TRIAL_LIMITS = TimeBudgetTable(
    name="speedy_trial_limits",
    budgets=(
        TimeBudget("a_felony", 6, TimeUnit.MONTHS, "A Felony (6 months)"),
        TimeBudget("felony", 6, TimeUnit.MONTHS, "Other Felony (6 months)"),
        TimeBudget("misdemeanor", 90, TimeUnit.DAYS, "Misdemeanor (90 days)"),
        TimeBudget("violation", 60, TimeUnit.DAYS, "Violation (60 days)"),
    ),
    citation="CPL §30.30(1)",
)

CHARGE_TYPE_OPTIONS = tuple(b.label for b in SPEEDY_TRIAL_LIMITS.budgets)

# =============================================================================
# TASKS
# =============================================================================

CRIMINAL_DEFENSE_TASKS = (
    TaskDefinition(
        task_id="cd-arraignment",
        name="Prepare for Arraignment",
        description="Prepare for client arraignment",
        statute="CPL Article 170, 180",
        fields=(
            FieldSpec("defendant_name", "Defendant Name", required=True),
            FieldSpec("charges", "Charges", FieldKind.TEXTAREA, required=True),
            FieldSpec("arrest_date", "Arrest Date", FieldKind.DATE, required=True),
            FieldSpec("bail_eligible", "Bail Eligible", FieldKind.CHECKBOX),
            FieldSpec("prior_record", "Prior Record", FieldKind.TEXTAREA),
            FieldSpec("community_ties", "Community Ties", FieldKind.TEXTAREA),
            FieldSpec("employment", "Employment Status"),
            FieldSpec("bail_recommendation", "Bail Recommendation"),
        ),
        notes=(
            "Under 2020 bail reform, most misdemeanors and non-violent felonies are non-bail "
            "eligible (CPL §510.10). Court must consider least restrictive conditions."
        ),
    ),
    TaskDefinition(
        task_id="cd-omnibus-motion",
        name="File Omnibus Motion",
        description="Prepare comprehensive pretrial motion",
        statute="CPL §255.20",
        deadline=DeadlineRule.fixed(45, "arraignment_date", "45 days after arraignment on indictment"),
        fields=(
            FieldSpec("arraignment_date", "Arraignment on Indictment Date", FieldKind.DATE),
            FieldSpec("suppression_requested", "Suppression Requested", FieldKind.CHECKBOX),
            FieldSpec("huntley_hearing", "Huntley Hearing (statements)", FieldKind.CHECKBOX),
            FieldSpec("mapp_hearing", "Mapp Hearing (search/seizure)", FieldKind.CHECKBOX),
            FieldSpec("wade_hearing", "Wade Hearing (identification)", FieldKind.CHECKBOX),
            FieldSpec("dunaway_hearing", "Dunaway Hearing (probable cause)", FieldKind.CHECKBOX),
            FieldSpec("sandoval_hearing", "Sandoval Hearing (prior bad acts)", FieldKind.CHECKBOX),
            FieldSpec("bill_of_particulars", "Bill of Particulars Demanded", FieldKind.CHECKBOX),
            FieldSpec("discovery_demands", "Discovery Demands", FieldKind.TEXTAREA),
        ),
        notes="All pretrial motions must be filed within 45 days. Good cause required for late filing.",
    ),
    TaskDefinition(
        task_id="cd-suppression",
        name="Draft Suppression Motion",
        description="Motion to suppress physical evidence",
        statute="CPL Article 710",
        fields=(
            FieldSpec("evidence_to_suppress", "Evidence to Suppress", FieldKind.TEXTAREA, required=True),
            FieldSpec(
                "basis_for_suppression", "Legal Basis", FieldKind.SELECT, required=True,
                options=(
                    "Illegal stop",
                    "Illegal search",
                    "Lack of probable cause",
                    "Lack of warrant",
                    "Fruit of poisonous tree",
                    "Miranda violation",
                ),
            ),
            FieldSpec("factual_basis", "Factual Basis", FieldKind.TEXTAREA, required=True),
            FieldSpec("case_law", "Supporting Case Law", FieldKind.TEXTAREA),
        ),
        notes=(
            "Defendant has burden to establish standing. People have burden to show legality "
            "of police conduct."
        ),
    ),
    TaskDefinition(
        task_id="cd-discovery",
        name="Request Discovery (CPL 245)",
        description="Demand discovery under 2020 reforms",
        statute="CPL §245",
        deadline=DeadlineRule.advisory("15 days after arraignment (automatic)"),
        fields=(
            FieldSpec("automatic_disclosure", "Automatic Disclosure Received", FieldKind.CHECKBOX),
            FieldSpec("witness_names", "Witness Names Received", FieldKind.CHECKBOX),
            FieldSpec("witness_statements", "Witness Statements Received", FieldKind.CHECKBOX),
            FieldSpec("expert_disclosure", "Expert Disclosure Received", FieldKind.CHECKBOX),
            FieldSpec("electronic_recordings", "Electronic Recordings Received", FieldKind.CHECKBOX),
            FieldSpec("brady_material", "Brady Material Received", FieldKind.CHECKBOX),
            FieldSpec("certificate_of_compliance", "COC Filed by People", FieldKind.CHECKBOX),
        ),
        notes=(
            "Under CPL §245, People must disclose all evidence within 15 days (or 20 for felonies). "
            "COC required before trial. Automatic discovery is mandatory."
        ),
    ),
    TaskDefinition(
        task_id="cd-bail-application",
        name="Analyze Bail Application",
        description="Prepare bail application under reform law",
        statute="CPL Article 510",
        fields=(
            FieldSpec(
                "charge_category", "Charge Category", FieldKind.SELECT, required=True,
                options=("Non-qualifying offense", "Qualifying offense", "VFO with bail eligible"),
            ),
            FieldSpec("flight_risk", "Flight Risk Analysis", FieldKind.TEXTAREA),
            FieldSpec("danger_assessment", "Danger Assessment (if applicable)", FieldKind.TEXTAREA),
            FieldSpec("least_restrictive", "Least Restrictive Conditions Argument", FieldKind.TEXTAREA),
            FieldSpec("bail_amount_requested", "Bail Amount Requested"),
            FieldSpec("supervised_release", "Supervised Release Requested", FieldKind.CHECKBOX),
        ),
        notes=(
            "2020 bail reform eliminates cash bail for most misdemeanors and non-violent felonies. "
            "Court must set least restrictive conditions. No consideration of dangerousness except "
            "for VFOs."
        ),
    ),
    TaskDefinition(
        task_id="cd-speedy-trial",
        name="Calculate Speedy Trial (30.30)",
        description="Calculate speedy trial time under CPL §30.30",
        statute="CPL §30.30",
        fields=(
            FieldSpec("charge_type", "Most Serious Charge", FieldKind.SELECT, required=True, options=CHARGE_TYPE_OPTIONS),
            FieldSpec("arraignment_date", "Arraignment Date", FieldKind.DATE, required=True),
            FieldSpec("total_time", "Total Calendar Days", FieldKind.NUMBER),
            FieldSpec("excludable_time", "Excludable Time (days)", FieldKind.NUMBER),
            FieldSpec("chargeable_time", "Chargeable Time (days)", FieldKind.NUMBER, readonly=True),
            FieldSpec("time_remaining", "Time Remaining", FieldKind.NUMBER, readonly=True),
        ),
        notes=(
            "Excludable time: defense motions, defendant absence, continuances at defense request, "
            "competency proceedings. Post-readiness delays generally excluded."
        ),
    ),
    TaskDefinition(
        task_id="cd-yo-eligibility",
        name="Analyze YO Eligibility",
        description="Evaluate Youthful Offender eligibility",
        statute="CPL §720.20",
        fields=(
            FieldSpec("defendant_age", "Defendant Age at Time of Offense", FieldKind.NUMBER, required=True),
            FieldSpec("prior_yo", "Prior YO Adjudication", FieldKind.CHECKBOX),
            FieldSpec("prior_felony", "Prior Felony Conviction", FieldKind.CHECKBOX),
            FieldSpec("current_charge", "Current Charge", required=True),
            FieldSpec("is_armed_felony", "Armed Felony", FieldKind.CHECKBOX),
            FieldSpec("eligible", "YO Eligible", FieldKind.CHECKBOX),
            FieldSpec("mitigating_factors", "Mitigating Factors", FieldKind.TEXTAREA),
        ),
        notes=(
            "Must be 16-18 at time of offense. Not eligible if prior YO or felony conviction. Armed "
            "felonies require exceptional circumstances. YO adjudication is sealed."
        ),
    ),
)

CRIMINAL_DEFENSE = PracticeArea(
    area_id=PracticeAreaId.CRIMINAL_DEFENSE,
    name="Criminal Defense",
    tasks=CRIMINAL_DEFENSE_TASKS,
    tables={
        SPEEDY_TRIAL_LIMITS.name: SPEEDY_TRIAL_LIMITS,
    },
)
