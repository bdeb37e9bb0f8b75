"""
Static document tables for checklist generation.

DOCUMENT_TEMPLATES maps a stable document key to its template; the other
tables map client attributes to document keys. Unknown tags map to nothing.
"""
from types import MappingProxyType
from app.models.enums import DeductionType, DocumentCategory, IncomeType


def _template(name, description, category, required, source=None):
    return MappingProxyType({
        "name": name,
        "description": description,
        "category": category,
        "required": required,
        "source": source,
    })


DOCUMENT_TEMPLATES = MappingProxyType({
    # Identity
    "id_primary": _template(
        "Government-issued Photo ID",
        "Valid driver's license, state ID, or passport",
        DocumentCategory.IDENTITY, True),
    "id_ssn_card": _template(
        "Social Security Card",
        "SSN card for yourself and all dependents",
        DocumentCategory.IDENTITY, True),
    "id_prior_return": _template(
        "Prior Year Tax Return",
        "Complete copy of last year's federal and state tax returns",
        DocumentCategory.IDENTITY, False),

    # Wages and 1099 income
    "income_w2": _template(
        "W-2 Forms",
        "W-2 from each employer showing wages and withholdings",
        DocumentCategory.INCOME, True),
    "income_1099nec": _template(
        "1099-NEC Forms",
        "Non-employee compensation from clients/companies (Uber, freelance work, etc.)",
        DocumentCategory.INCOME, True),
    "income_1099misc": _template(
        "1099-MISC Forms",
        "Miscellaneous income including royalties, prizes, awards",
        DocumentCategory.INCOME, True),
    "income_1099k": _template(
        "1099-K Forms",
        "Payment card and third-party network transactions (PayPal, Venmo, etc.)",
        DocumentCategory.INCOME, True),

    # Investments
    "income_1099div": _template(
        "1099-DIV Forms",
        "Dividend income from investments",
        DocumentCategory.INVESTMENTS, True),
    "income_1099int": _template(
        "1099-INT Forms",
        "Interest income from banks and investments",
        DocumentCategory.INVESTMENTS, True),
    "income_1099b": _template(
        "1099-B Forms",
        "Proceeds from broker and barter exchange transactions",
        DocumentCategory.INVESTMENTS, True),

    # Retirement and benefits
    "income_1099r": _template(
        "1099-R Forms",
        "Distributions from pensions, annuities, retirement plans, IRAs",
        DocumentCategory.INCOME, True),
    "income_ssa1099": _template(
        "SSA-1099",
        "Social Security benefit statement",
        DocumentCategory.INCOME, True),
    "income_1099g": _template(
        "1099-G Forms",
        "Unemployment compensation and state tax refunds",
        DocumentCategory.INCOME, True),

    # Crypto
    "income_crypto": _template(
        "Cryptocurrency Transaction Records",
        "Complete transaction history from all crypto exchanges (Coinbase, Binance, etc.)",
        DocumentCategory.INVESTMENTS, True),
    "income_crypto_1099": _template(
        "Crypto 1099 Forms",
        "1099-MISC or 1099-B from cryptocurrency exchanges",
        DocumentCategory.INVESTMENTS, False),

    # Rental property
    "income_rental": _template(
        "Rental Income Records",
        "Annual rental income summary for each property",
        DocumentCategory.PROPERTY, True),
    "expense_rental": _template(
        "Rental Expense Records",
        "Receipts for repairs, maintenance, property management, insurance",
        DocumentCategory.PROPERTY, True),
    "doc_1098_rental": _template(
        "1098 Mortgage Interest (Rental)",
        "Mortgage interest statement for rental properties",
        DocumentCategory.PROPERTY, True),

    # Foreign
    "income_foreign": _template(
        "Foreign Income Documentation",
        "Income statements from foreign employers or sources",
        DocumentCategory.INCOME, True),
    "doc_fbar": _template(
        "Foreign Bank Account Records",
        "Statements showing highest balances for all foreign accounts (FBAR requirement)",
        DocumentCategory.OTHER, True),

    # Business
    "income_business": _template(
        "Business Income Records",
        "Profit & Loss statement or income summary for your business",
        DocumentCategory.BUSINESS, True),
    "expense_business": _template(
        "Business Expense Records",
        "Receipts and records for all business expenses",
        DocumentCategory.BUSINESS, True),
    "doc_business_assets": _template(
        "Business Asset Records",
        "Records of equipment, vehicles, and other assets purchased for business",
        DocumentCategory.BUSINESS, False),

    # Deductions
    "ded_1098": _template(
        "1098 Mortgage Interest Statement",
        "Shows mortgage interest paid during the year",
        DocumentCategory.PROPERTY, True),
    "ded_property_tax": _template(
        "Property Tax Statements",
        "Annual property tax bills or statements",
        DocumentCategory.PROPERTY, True),
    "ded_charity_cash": _template(
        "Charitable Donation Receipts",
        "Receipts for cash donations to qualified charities",
        DocumentCategory.EXPENSES, True),
    "ded_charity_noncash": _template(
        "Non-Cash Donation Records",
        "Receipts and fair market value for donated items",
        DocumentCategory.EXPENSES, False),
    "ded_1098e": _template(
        "1098-E Student Loan Interest",
        "Statement showing student loan interest paid",
        DocumentCategory.EDUCATION, True),
    "ded_1098t": _template(
        "1098-T Tuition Statement",
        "Statement of tuition paid for higher education",
        DocumentCategory.EDUCATION, True),
    "ded_401k": _template(
        "401(k) Contribution Records",
        "Year-end statement showing 401(k) contributions (usually on W-2)",
        DocumentCategory.OTHER, False),
    "ded_ira": _template(
        "IRA Contribution Records",
        "Form 5498 or statements showing IRA contributions",
        DocumentCategory.OTHER, True),
    "ded_hsa": _template(
        "HSA Contribution Records",
        "Form 5498-SA or statements showing HSA contributions",
        DocumentCategory.HEALTHCARE, True),
    "ded_1099sa": _template(
        "1099-SA HSA Distributions",
        "Statement of HSA distributions",
        DocumentCategory.HEALTHCARE, True),
    "ded_medical": _template(
        "Medical Expense Records",
        "Receipts for out-of-pocket medical expenses",
        DocumentCategory.HEALTHCARE, False),
    "ded_childcare": _template(
        "Childcare Provider Information",
        "Provider name, address, tax ID, and amount paid",
        DocumentCategory.EXPENSES, True),
    "ded_home_office": _template(
        "Home Office Records",
        "Square footage of home and office, home expenses (utilities, rent/mortgage, etc.)",
        DocumentCategory.BUSINESS, True),

    # Health coverage
    "hc_1095a": _template(
        "1095-A Health Insurance Marketplace",
        "Statement from Healthcare.gov if you had marketplace insurance",
        DocumentCategory.HEALTHCARE, True),
    "hc_1095b": _template(
        "1095-B Health Coverage",
        "Statement from health insurance provider",
        DocumentCategory.HEALTHCARE, False),

    # Gig platforms
    "gig_uber": _template(
        "1099-NEC from Uber",
        "Non-employee compensation from Uber",
        DocumentCategory.INCOME, True, source="Uber"),
    "gig_lyft": _template(
        "1099-NEC from Lyft",
        "Non-employee compensation from Lyft",
        DocumentCategory.INCOME, True, source="Lyft"),
    "gig_doordash": _template(
        "1099-NEC from DoorDash",
        "Non-employee compensation from DoorDash",
        DocumentCategory.INCOME, True, source="DoorDash"),
    "gig_mileage": _template(
        "Mileage Log",
        "Record of business miles driven for gig work",
        DocumentCategory.BUSINESS, True),
})

IDENTITY_DOCUMENTS = ("id_primary", "id_ssn_card", "id_prior_return")

INCOME_TO_DOCUMENTS = MappingProxyType({
    IncomeType.WAGES_W2: ("income_w2",),
    IncomeType.SELF_EMPLOYMENT_1099NEC: ("income_1099nec", "income_1099k", "expense_business"),
    IncomeType.FREELANCE_1099MISC: ("income_1099misc", "income_1099nec", "expense_business"),
    IncomeType.GIG_ECONOMY: ("income_1099nec", "income_1099k", "gig_mileage"),
    IncomeType.RENTAL_INCOME: ("income_rental", "expense_rental", "doc_1098_rental"),
    IncomeType.INVESTMENT_INCOME: ("income_1099b", "income_1099int"),
    IncomeType.DIVIDENDS: ("income_1099div",),
    IncomeType.CAPITAL_GAINS: ("income_1099b",),
    IncomeType.RETIREMENT_DISTRIBUTIONS: ("income_1099r",),
    IncomeType.SOCIAL_SECURITY: ("income_ssa1099",),
    IncomeType.UNEMPLOYMENT: ("income_1099g",),
    IncomeType.CRYPTO_INCOME: ("income_crypto", "income_crypto_1099"),
    IncomeType.FOREIGN_INCOME: ("income_foreign", "doc_fbar"),
})

DEDUCTION_TO_DOCUMENTS = MappingProxyType({
    DeductionType.MORTGAGE_INTEREST: ("ded_1098",),
    DeductionType.PROPERTY_TAXES: ("ded_property_tax",),
    DeductionType.CHARITABLE_DONATIONS: ("ded_charity_cash", "ded_charity_noncash"),
    DeductionType.MEDICAL_EXPENSES: ("ded_medical",),
    DeductionType.STUDENT_LOAN_INTEREST: ("ded_1098e",),
    DeductionType.HOME_OFFICE: ("ded_home_office",),
    DeductionType.BUSINESS_EXPENSES: ("expense_business", "doc_business_assets"),
    DeductionType.HSA_CONTRIBUTIONS: ("ded_hsa", "ded_1099sa"),
    DeductionType.IRA_CONTRIBUTIONS: ("ded_ira",),
    DeductionType.CONTRIBUTIONS_401K: ("ded_401k",),
    DeductionType.CHILDCARE_EXPENSES: ("ded_childcare",),
})

# Keyed by Client attribute name
FLAG_TO_DOCUMENTS = MappingProxyType({
    "has_crypto": ("income_crypto", "income_crypto_1099"),
    "has_foreign_accounts": ("income_foreign", "doc_fbar"),
    "has_rental_property": ("income_rental", "expense_rental", "doc_1098_rental"),
    "has_business_income": ("income_business", "expense_business", "doc_business_assets", "ded_home_office"),
    "has_health_insurance": ("hc_1095a", "hc_1095b"),
})

# Employer name fragment -> platform 1099 document
GIG_PLATFORM_DOCUMENTS = MappingProxyType({
    "uber": "gig_uber",
    "lyft": "gig_lyft",
    "doordash": "gig_doordash",
})
GIG_MILEAGE_DOCUMENT = "gig_mileage"

CATEGORY_HEADINGS = MappingProxyType({
    DocumentCategory.IDENTITY: "📋 Identity Documents",
    DocumentCategory.INCOME: "💰 Income Documents",
    DocumentCategory.EXPENSES: "💳 Expense Records",
    DocumentCategory.INVESTMENTS: "📈 Investment Documents",
    DocumentCategory.PROPERTY: "🏠 Property Documents",
    DocumentCategory.BUSINESS: "💼 Business Documents",
    DocumentCategory.HEALTHCARE: "🏥 Healthcare Documents",
    DocumentCategory.EDUCATION: "🎓 Education Documents",
    DocumentCategory.OTHER: "📁 Other Documents",
})
