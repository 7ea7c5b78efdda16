"""Real Estate Rules.

Task catalogue for New York residential and commercial closings, plus the
flat-rate transfer tax, mansion tax and NYC mortgage recording tax tables.

Every table here is single-bracket: the rate of the bracket containing the
consideration applies to the whole consideration. Threshold inclusivity
follows the statutory wording of each tax (see BracketTable.upper_inclusive).
"""

from __future__ import annotations

from decimal import Decimal

from .rule_types import (
    Bracket,
    BracketTable,
    DeadlineRule,
    FieldKind,
    FieldSpec,
    PracticeArea,
    PracticeAreaId,
    TaskDefinition,
)


def _d(value: str) -> Decimal:
    return Decimal(value)


NYC_RPT_THRESHOLD = _d("500000")

# =============================================================================
# TRANSFER TAX TABLES
# =============================================================================

# $2 per $500 of consideration
NYS_TRANSFER_TAX = BracketTable(
    name="nys_transfer_tax",
    brackets=(Bracket(_d("0"), None, _d("0.004")),),
    citation="Tax Law §1402",
)

# "$500,000 or less" takes the lower rate
NYC_TRANSFER_TAX_RESIDENTIAL = BracketTable(
    name="nyc_transfer_tax_residential",
    brackets=(
        Bracket(_d("0"), NYC_RPT_THRESHOLD, _d("0.01")),
        Bracket(NYC_RPT_THRESHOLD, None, _d("0.01425")),
    ),
    upper_inclusive=True,
    citation="NYC Admin Code §11-2102",
)

NYC_TRANSFER_TAX_COMMERCIAL = BracketTable(
    name="nyc_transfer_tax_commercial",
    brackets=(
        Bracket(_d("0"), NYC_RPT_THRESHOLD, _d("0.01425")),
        Bracket(NYC_RPT_THRESHOLD, None, _d("0.02625")),
    ),
    upper_inclusive=True,
    citation="NYC Admin Code §11-2102",
)

# Conveyances of $1 million or more; eight tiers inside NYC
MANSION_TAX = BracketTable(
    name="mansion_tax",
    brackets=(
        Bracket(_d("0"), _d("1000000"), _d("0")),
        Bracket(_d("1000000"), _d("2000000"), _d("0.01")),
        Bracket(_d("2000000"), _d("3000000"), _d("0.0125")),
        Bracket(_d("3000000"), _d("5000000"), _d("0.015")),
        Bracket(_d("5000000"), _d("10000000"), _d("0.0225")),
        Bracket(_d("10000000"), _d("15000000"), _d("0.0325")),
        Bracket(_d("15000000"), _d("20000000"), _d("0.035")),
        Bracket(_d("20000000"), _d("25000000"), _d("0.0375")),
        Bracket(_d("25000000"), None, _d("0.039")),
    ),
    citation="Tax Law §1402-a",
)

MANSION_TAX_OUTSIDE_NYC = BracketTable(
    name="mansion_tax_outside_nyc",
    brackets=(
        Bracket(_d("0"), _d("1000000"), _d("0")),
        Bracket(_d("1000000"), None, _d("0.01")),
    ),
    citation="Tax Law §1402-a",
)

# Under $500,000: 1.8%; $500,000 or more: 1.925%
NYC_MORTGAGE_RECORDING_TAX = BracketTable(
    name="nyc_mortgage_recording_tax",
    brackets=(
        Bracket(_d("0"), _d("500000"), _d("0.018")),
        Bracket(_d("500000"), None, _d("0.01925")),
    ),
    citation="Tax Law §253; NYC Admin Code §11-2601",
)

# =============================================================================
# TASKS
# =============================================================================

REAL_ESTATE_TASKS = (
    TaskDefinition(
        task_id="re-contract-review",
        name="Review Contract of Sale",
        description="Review and negotiate purchase/sale contract",
        fields=(
            FieldSpec("property_address", "Property Address", required=True),
            FieldSpec("purchase_price", "Purchase Price", FieldKind.NUMBER, required=True),
            FieldSpec("down_payment", "Down Payment", FieldKind.NUMBER, required=True),
            FieldSpec("mortgage_contingency", "Mortgage Contingency", FieldKind.CHECKBOX),
            FieldSpec("mortgage_amount", "Mortgage Amount", FieldKind.NUMBER),
            FieldSpec("closing_date", "Proposed Closing Date", FieldKind.DATE),
            FieldSpec(
                "property_type", "Property Type", FieldKind.SELECT, required=True,
                options=("Single Family", "Condo", "Co-op", "Multi-Family", "Commercial"),
            ),
            FieldSpec("contingencies", "Other Contingencies", FieldKind.TEXTAREA),
        ),
        notes="Standard NYC contract is REBNY form. Attorney approval period typically 3 days.",
    ),
    TaskDefinition(
        task_id="re-title-search",
        name="Order Title Search",
        description="Order and review title search and survey",
        fields=(
            FieldSpec("title_company", "Title Company"),
            FieldSpec("search_ordered", "Search Ordered Date", FieldKind.DATE),
            FieldSpec("exceptions", "Title Exceptions Found", FieldKind.TEXTAREA),
            FieldSpec("liens", "Outstanding Liens", FieldKind.TEXTAREA),
            FieldSpec("judgments", "Judgments", FieldKind.TEXTAREA),
            FieldSpec("easements", "Easements/Restrictions", FieldKind.TEXTAREA),
        ),
        notes="Review for judgments, liens, encroachments, easements. Check tax status.",
    ),
    TaskDefinition(
        task_id="re-cema",
        name="Prepare CEMA Documents",
        description="Consolidation, Extension, and Modification Agreement",
        statute="Tax Law §255",
        fields=(
            FieldSpec("existing_mortgage", "Existing Mortgage Amount", FieldKind.NUMBER, required=True),
            FieldSpec("new_mortgage", "New Mortgage Amount", FieldKind.NUMBER, required=True),
            FieldSpec("gap_amount", "Gap Amount (New - Existing)", FieldKind.NUMBER, readonly=True),
            FieldSpec("mortgage_tax_savings", "Mortgage Tax Savings", FieldKind.NUMBER, readonly=True),
            FieldSpec("existing_lender", "Existing Lender"),
            FieldSpec("new_lender", "New Lender"),
        ),
        notes=(
            "CEMA allows buyer to avoid mortgage recording tax on existing loan amount. Only pays "
            "tax on gap (new loan minus existing). NYC mortgage tax rate is 1.8% (under $500k) or "
            "1.925% (over $500k)."
        ),
    ),
    TaskDefinition(
        task_id="re-coop-board",
        name="Prepare Co-op Board Package",
        description="Assemble complete board application package",
        fields=(
            FieldSpec("purchaser_name", "Purchaser Name", required=True),
            FieldSpec("financial_statement", "Financial Statement Complete", FieldKind.CHECKBOX),
            FieldSpec("tax_returns", "Tax Returns (2-3 years)", FieldKind.CHECKBOX),
            FieldSpec("employment_letter", "Employment Verification", FieldKind.CHECKBOX),
            FieldSpec("bank_statements", "Bank Statements", FieldKind.CHECKBOX),
            FieldSpec("reference_letters", "Reference Letters", FieldKind.CHECKBOX),
            FieldSpec("credit_report", "Credit Report", FieldKind.CHECKBOX),
            FieldSpec("dti_ratio", "Debt-to-Income Ratio"),
        ),
        notes="Board can reject without reason under Business Judgment Rule. Typical DTI requirement under 28%.",
    ),
    TaskDefinition(
        task_id="re-transfer-taxes",
        name="Calculate Transfer Taxes",
        description="Calculate all applicable transfer taxes",
        statute="Tax Law §1402; NYC Admin Code §11-2102",
        fields=(
            FieldSpec("sale_price", "Sale Price", FieldKind.NUMBER, required=True),
            FieldSpec("is_nyc", "NYC Property", FieldKind.CHECKBOX),
            FieldSpec("is_residential", "Residential (1-3 family)", FieldKind.CHECKBOX),
            FieldSpec("is_new_construction", "New Construction/Sponsor Sale", FieldKind.CHECKBOX),
            FieldSpec("nys_transfer_tax", "NYS Transfer Tax", FieldKind.NUMBER, readonly=True),
            FieldSpec("nyc_transfer_tax", "NYC Transfer Tax", FieldKind.NUMBER, readonly=True),
            FieldSpec("mansion_tax", "Mansion Tax", FieldKind.NUMBER, readonly=True),
        ),
        notes=(
            "NYS Transfer Tax: $2 per $500 (0.4%). NYC RPT: 1% (under $500k) or 1.425% (over $500k) "
            "for residential. Mansion Tax: Progressive 1%-3.9% on sales $1M+ (8 tiers). Seller "
            "typically pays transfer taxes; buyer pays mansion tax."
        ),
    ),
    TaskDefinition(
        task_id="re-closing-statement",
        name="Prepare Closing Statement",
        description="Prepare TRID closing disclosure / HUD-1 statement",
        statute="RESPA, TRID",
        fields=(
            FieldSpec("purchase_price", "Purchase Price", FieldKind.NUMBER, required=True),
            FieldSpec("deposit", "Contract Deposit", FieldKind.NUMBER),
            FieldSpec("mortgage_amount", "Mortgage Amount", FieldKind.NUMBER),
            FieldSpec("closing_costs", "Total Closing Costs", FieldKind.NUMBER),
            FieldSpec("prepaid_items", "Prepaid Items", FieldKind.NUMBER),
            FieldSpec("adjustments", "Prorations/Adjustments", FieldKind.TEXTAREA),
            FieldSpec("amount_due_from_buyer", "Amount Due from Buyer", FieldKind.NUMBER),
            FieldSpec("amount_due_to_seller", "Amount Due to Seller", FieldKind.NUMBER),
        ),
    ),
    TaskDefinition(
        task_id="re-rp5217",
        name="File RP-5217",
        description="Complete Real Property Transfer Report",
        statute="Real Property Law §333",
        deadline=DeadlineRule.advisory("15 days after recording"),
        fields=(
            FieldSpec("sale_price", "Sale Price", FieldKind.NUMBER, required=True),
            FieldSpec("property_class", "Property Class"),
            FieldSpec("assessment", "Current Assessment", FieldKind.NUMBER),
            FieldSpec("grantor", "Grantor (Seller)", required=True),
            FieldSpec("grantee", "Grantee (Buyer)", required=True),
        ),
        notes="Required for all real property transfers. Filed with county clerk.",
    ),
)

REAL_ESTATE = PracticeArea(
    area_id=PracticeAreaId.REAL_ESTATE,
    name="Real Estate",
    tasks=REAL_ESTATE_TASKS,
    tables={
        table.name: table
        for table in (
            NYS_TRANSFER_TAX,
            NYC_TRANSFER_TAX_RESIDENTIAL,
            NYC_TRANSFER_TAX_COMMERCIAL,
            MANSION_TAX,
            MANSION_TAX_OUTSIDE_NYC,
            NYC_MORTGAGE_RECORDING_TAX,
        )
    },
)
