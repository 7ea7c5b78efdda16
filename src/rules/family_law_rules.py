"""Family Law Rules.

Task catalogue for New York matrimonial and Family Court matters, plus the
Child Support Standards Act percentage schedule, the post-2016 maintenance
duration guidelines and the DRL §236(B)(5)(d) equitable distribution factors.
"""

from __future__ import annotations

from decimal import Decimal

from .rule_types import (
    DeadlineRule,
    DurationGuideline,
    DurationGuidelineTable,
    FactorList,
    FieldKind,
    FieldSpec,
    PercentageSchedule,
    PracticeArea,
    PracticeAreaId,
    TaskDefinition,
)


# =============================================================================
# TABLES
# =============================================================================

CSSA_PERCENTAGES = PercentageSchedule(
    name="cssa_percentages",
    rates=(
        (1, Decimal("0.17")),
        (2, Decimal("0.25")),
        (3, Decimal("0.29")),
        (4, Decimal("0.31")),
        (5, Decimal("0.35")),  # 5 or more children
    ),
    citation="DRL §240(1-b)(b)(3)",
)

MAINTENANCE_DURATION = DurationGuidelineTable(
    name="maintenance_duration",
    bands=(
        DurationGuideline(Decimal("0"), Decimal("15"), Decimal("0.15"), Decimal("0.30")),
        DurationGuideline(Decimal("15"), Decimal("20"), Decimal("0.30"), Decimal("0.40")),
        DurationGuideline(Decimal("20"), None, Decimal("0.35"), Decimal("0.50")),
    ),
    citation="DRL §236(B)(6)(f)",
)

EQUITABLE_DISTRIBUTION_FACTORS = FactorList(
    name="equitable_distribution_factors",
    factors=(
        "Income and property at time of marriage and at commencement",
        "Duration of marriage and age/health of parties",
        "Need of custodial parent to occupy marital residence",
        "Loss of inheritance/pension rights",
        "Contributions as spouse, parent, homemaker",
        "Liquid or non-liquid character of assets",
        "Future financial circumstances",
        "Difficulty of valuing business interests",
        "Tax consequences",
        "Wasteful dissipation of assets",
        "Transfer/encumbrance in contemplation of divorce",
        "Any other factor court finds just and proper",
    ),
    citation="DRL §236(B)(5)(d)",
)

# =============================================================================
# TASKS
# =============================================================================

DIVORCE_GROUNDS = (
    "Irretrievable breakdown (DRL §170(7))",
    "Cruel and inhuman treatment",
    "Abandonment (1+ year)",
    "Imprisonment (3+ years)",
    "Adultery",
    "Living apart pursuant to separation agreement",
    "Living apart pursuant to judgment of separation",
)

FAMILY_LAW_TASKS = (
    TaskDefinition(
        task_id="fl-summons-complaint",
        name="File Divorce Summons",
        description="File Summons with Notice or Summons and Complaint",
        statute="DRL §232",
        fields=(
            FieldSpec("plaintiff_name", "Plaintiff Name", required=True),
            FieldSpec("defendant_name", "Defendant Name", required=True),
            FieldSpec("marriage_date", "Date of Marriage", FieldKind.DATE, required=True),
            FieldSpec("separation_date", "Date of Separation", FieldKind.DATE),
            FieldSpec("grounds", "Grounds for Divorce", FieldKind.SELECT, required=True, options=DIVORCE_GROUNDS),
            FieldSpec("children", "Minor Children", FieldKind.CHECKBOX),
            FieldSpec("num_children", "Number of Children", FieldKind.NUMBER),
        ),
        notes=(
            "Automatic Orders take effect upon service (DRL §236(B)(2)). No transfer of assets, "
            "no insurance changes, no dissipation of marital property."
        ),
    ),
    TaskDefinition(
        task_id="fl-statement-net-worth",
        name="Prepare Statement of Net Worth",
        description="Complete sworn statement of net worth",
        statute="DRL §236(B), 22 NYCRR §202.16",
        deadline=DeadlineRule.advisory("10 days after preliminary conference"),
        fields=(
            FieldSpec("gross_income", "Gross Annual Income", FieldKind.NUMBER, required=True),
            FieldSpec("net_income", "Net Annual Income", FieldKind.NUMBER, required=True),
            FieldSpec("real_property", "Real Property Value", FieldKind.NUMBER),
            FieldSpec("bank_accounts", "Bank Accounts Total", FieldKind.NUMBER),
            FieldSpec("retirement_accounts", "Retirement Accounts", FieldKind.NUMBER),
            FieldSpec("other_assets", "Other Assets", FieldKind.NUMBER),
            FieldSpec("liabilities", "Total Liabilities", FieldKind.NUMBER),
            FieldSpec("monthly_expenses", "Monthly Expenses", FieldKind.NUMBER),
        ),
        notes="Must attach tax returns, pay stubs, W-2s. Subject to perjury penalties.",
    ),
    TaskDefinition(
        task_id="fl-custody-petition",
        name="Draft Custody/Visitation Petition",
        description="Prepare custody or visitation petition",
        statute="FCA Article 6",
        fields=(
            FieldSpec("petitioner", "Petitioner Name", required=True),
            FieldSpec("respondent", "Respondent Name", required=True),
            FieldSpec("children", "Children Names/DOBs", FieldKind.TEXTAREA, required=True),
            FieldSpec(
                "custody_type", "Custody Requested", FieldKind.SELECT, required=True,
                options=(
                    "Sole legal and physical",
                    "Joint legal, primary physical",
                    "Joint legal and physical",
                    "Visitation only",
                ),
            ),
            FieldSpec("current_arrangement", "Current Arrangement", FieldKind.TEXTAREA),
            FieldSpec("best_interest_factors", "Best Interest Factors", FieldKind.TEXTAREA),
        ),
        notes=(
            "Best interest of child standard. Court considers domestic violence, substance abuse, "
            "parental fitness."
        ),
    ),
    TaskDefinition(
        task_id="fl-child-support",
        name="Calculate Child Support (CSSA)",
        description="Calculate child support under Child Support Standards Act",
        statute="DRL §240(1-b)",
        fields=(
            FieldSpec("cp_income", "Custodial Parent Gross Income", FieldKind.NUMBER, required=True),
            FieldSpec("ncp_income", "Non-Custodial Parent Gross Income", FieldKind.NUMBER, required=True),
            FieldSpec("fica_cp", "CP FICA Deductions", FieldKind.NUMBER),
            FieldSpec("fica_ncp", "NCP FICA Deductions", FieldKind.NUMBER),
            FieldSpec(
                "num_children", "Number of Children", FieldKind.SELECT, required=True,
                options=("1", "2", "3", "4", "5+"),
            ),
            FieldSpec("childcare_costs", "Childcare Costs", FieldKind.NUMBER),
            FieldSpec("health_insurance", "Health Insurance Costs", FieldKind.NUMBER),
            FieldSpec("educational_expenses", "Educational Expenses", FieldKind.NUMBER),
            FieldSpec("ncp_annual_obligation", "NCP Annual Obligation", FieldKind.NUMBER, readonly=True),
        ),
        notes=(
            "CSSA percentages: 1 child=17%, 2=25%, 3=29%, 4=31%, 5+=35%. Cap at $183,000 combined "
            "income (2024). Add-ons: childcare, health insurance, educational expenses."
        ),
    ),
    TaskDefinition(
        task_id="fl-maintenance",
        name="Prepare Maintenance Worksheet",
        description="Calculate spousal maintenance under 2016 guidelines",
        statute="DRL §236(B)(6)",
        fields=(
            FieldSpec("payor_income", "Payor Gross Income", FieldKind.NUMBER, required=True),
            FieldSpec("payee_income", "Payee Gross Income", FieldKind.NUMBER, required=True),
            FieldSpec("marriage_length", "Length of Marriage (years)", FieldKind.NUMBER, required=True),
            FieldSpec("child_support_paid", "Child Support Paid by Payor", FieldKind.NUMBER),
            FieldSpec(
                "pre_post_divorce", "Pre or Post-Divorce", FieldKind.SELECT, required=True,
                options=("Pendente lite (during)", "Post-divorce"),
            ),
            FieldSpec("guideline_maintenance", "Guideline Annual Maintenance", FieldKind.NUMBER, readonly=True),
            FieldSpec("advisory_duration", "Advisory Duration", readonly=True),
        ),
        notes=(
            "Duration guidelines: 0-15 years = 15-30% of marriage length; 15-20 years = 30-40%; "
            "20+ years = 35-50%. Income cap: $228,000 (2024)."
        ),
    ),
    TaskDefinition(
        task_id="fl-osc",
        name="File Order to Show Cause",
        description="Prepare emergency motion via Order to Show Cause",
        statute="CPLR §2214",
        fields=(
            FieldSpec("relief_requested", "Relief Requested", FieldKind.TEXTAREA, required=True),
            FieldSpec("emergency_basis", "Emergency Basis", FieldKind.TEXTAREA, required=True),
            FieldSpec("tro_requested", "TRO Requested", FieldKind.CHECKBOX),
            FieldSpec("stay_requested", "Stay Requested", FieldKind.CHECKBOX),
            FieldSpec("proposed_date", "Proposed Return Date", FieldKind.DATE),
        ),
        notes="Must show sufficient cause for short notice. Judge signs OSC with return date.",
    ),
    TaskDefinition(
        task_id="fl-stipulation",
        name="Draft Stipulation of Settlement",
        description="Prepare comprehensive settlement agreement",
        statute="DRL §236(B)(3)",
        fields=(
            FieldSpec("equitable_distribution", "Property Distribution Terms", FieldKind.TEXTAREA, required=True),
            FieldSpec("maintenance_terms", "Maintenance Terms", FieldKind.TEXTAREA),
            FieldSpec("child_support_terms", "Child Support Terms", FieldKind.TEXTAREA),
            FieldSpec("custody_terms", "Custody/Visitation Terms", FieldKind.TEXTAREA),
            FieldSpec("health_insurance", "Health Insurance Terms", FieldKind.TEXTAREA),
            FieldSpec("life_insurance", "Life Insurance Requirements", FieldKind.TEXTAREA),
            FieldSpec("retirement_division", "Retirement Division Terms", FieldKind.TEXTAREA),
        ),
        notes="Must be acknowledged before notary. Consider QDRO for retirement accounts.",
    ),
)

FAMILY_LAW = PracticeArea(
    area_id=PracticeAreaId.FAMILY_LAW,
    name="Family Law",
    tasks=FAMILY_LAW_TASKS,
    tables={
        CSSA_PERCENTAGES.name: CSSA_PERCENTAGES,
        MAINTENANCE_DURATION.name: MAINTENANCE_DURATION,
        EQUITABLE_DISTRIBUTION_FACTORS.name: EQUITABLE_DISTRIBUTION_FACTORS,
    },
)
