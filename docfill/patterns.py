"""Pattern library of field rules and relevance keywords per schema.

Label synonyms are regex fragments tried in order at each position of
the text, so longer synonyms are listed before their prefixes.
"""

from __future__ import annotations

from docfill.rules import (
    DECIMAL_TEXT_TOKEN,
    IDENTIFIER_TOKEN,
    FieldRule,
    ValueKind,
    amount_rule,
    date_rule,
    text_rule,
)
from docfill.taxonomy import SchemaId

# -----------------------------------------------------------------
# Income statement
# -----------------------------------------------------------------

_REVENUE_RULE = amount_rule(
    "revenue",
    [r"total\s+revenues?", r"revenues?", r"net\s+sales", r"(?<!cost of )sales", r"turnover"],
    description="Total revenue or sales",
)

_COGS_RULE = amount_rule(
    "cogs",
    [r"cost\s+of\s+goods\s+sold", r"cost\s+of\s+sales", r"cogs"],
    description="Cost of goods sold",
)

_EXPENSES_RULE = amount_rule(
    "expenses",
    [r"operating\s+expenses", r"total\s+expenses", r"opex", r"(?<!interest )(?<!tax )expenses"],
    description="Operating expenses",
)

_NET_INCOME_RULE = amount_rule(
    "netIncome",
    [r"net\s+income", r"net\s+profit", r"net\s+earnings", r"profit\s+after\s+tax"],
    description="Net income after all expenses",
)

INCOME_STATEMENT_RULES: tuple[FieldRule, ...] = (
    _REVENUE_RULE,
    _COGS_RULE,
    _EXPENSES_RULE,
    _NET_INCOME_RULE,
)

# -----------------------------------------------------------------
# Comprehensive financial statements
# -----------------------------------------------------------------

COMPREHENSIVE_FINANCIAL_RULES: tuple[FieldRule, ...] = INCOME_STATEMENT_RULES + (
    amount_rule("depreciation", [r"depreciation", r"amortization"]),
    amount_rule("interestExpense", [r"interest\s+expenses?", r"interest\s+costs?"]),
    amount_rule("taxExpense", [r"tax\s+expenses?", r"income\s+tax(?:es)?", r"taxes"]),
    # Balance sheet items
    amount_rule(
        "cash",
        [
            r"cash\s+and\s+cash\s+equivalents",
            r"cash\s+equivalents",
            r"(?<!beginning )(?<!opening )(?<!ending )cash",
        ],
    ),
    amount_rule("accountsReceivable", [r"accounts\s+receivable", r"receivables", r"ar"]),
    amount_rule("inventory", [r"inventor(?:y|ies)", r"(?<!capital )(?<!common )stock"]),
    amount_rule(
        "ppe",
        [
            r"property,?\s+plant,?\s+(?:and\s+|&\s+)?equipment",
            r"pp&e",
            r"ppe",
            r"fixed\s+assets",
        ],
    ),
    amount_rule("intangibleAssets", [r"intangible\s+assets", r"intangibles"]),
    amount_rule("accountsPayable", [r"accounts\s+payable", r"payables", r"ap"]),
    amount_rule("shortTermDebt", [r"short.?term\s+debt", r"current\s+debt"]),
    amount_rule("longTermDebt", [r"long.?term\s+debt", r"non.?current\s+debt"]),
    amount_rule("shareCapital", [r"share\s+capital", r"capital\s+stock", r"common\s+stock"]),
    amount_rule("retainedEarnings", [r"retained\s+earnings", r"accumulated\s+earnings"]),
    # Cash flow items
    amount_rule("capex", [r"capital\s+expenditures?", r"capital\s+spending", r"capex"]),
    amount_rule(
        "workingCapitalChange",
        [r"change\s+in\s+working\s+capital", r"working\s+capital\s+change", r"wc\s+change"],
    ),
    amount_rule("debtProceeds", [r"debt\s+proceeds", r"proceeds\s+from\s+debt", r"borrowings"]),
    amount_rule("debtRepayments", [r"debt\s+repayments?", r"debt\s+payments?"]),
    amount_rule("dividendsPaid", [r"dividends\s+paid", r"dividend\s+payments?"]),
    amount_rule("beginningCash", [r"beginning\s+cash", r"opening\s+cash"]),
)

# -----------------------------------------------------------------
# Balance sheet
# -----------------------------------------------------------------

# "current" must not be the tail of "non-current" / "noncurrent"
_NOT_NON = r"(?<!non-)(?<!non )(?<!non)"

BALANCE_SHEET_RULES: tuple[FieldRule, ...] = (
    amount_rule(
        "currentAssets",
        [r"total\s+current\s+assets", rf"{_NOT_NON}current\s+assets"],
        description="Total current assets",
    ),
    amount_rule(
        "fixedAssets",
        [r"fixed\s+assets", r"non.?current\s+assets"],
        description="Fixed or non-current assets",
    ),
    amount_rule(
        "currentLiabilities",
        [r"total\s+current\s+liabilities", rf"{_NOT_NON}current\s+liabilities"],
        description="Total current liabilities",
    ),
    amount_rule(
        "longTermDebt",
        [r"long.?term\s+debt", r"non.?current\s+liabilities"],
        description="Long-term debt or non-current liabilities",
    ),
    amount_rule(
        "equity",
        [
            r"total\s+equity",
            r"share\s*holders'?\s+equity",
            r"stock\s*holders'?\s+equity",
            r"(?<!and )(?<!& )equity",
        ],
        description="Shareholders' equity",
    ),
)

# -----------------------------------------------------------------
# Invoice
# -----------------------------------------------------------------

INVOICE_RULES: tuple[FieldRule, ...] = (
    text_rule(
        "invoiceNumber",
        [r"invoice\s*(?:number|num|no\.?|id)", r"inv\.?\s*(?:number|no\.?)", r"invoice", r"inv"],
        description="Invoice identifier (e.g., INV-2024-001)",
        token=IDENTIFIER_TOKEN,
    ),
    date_rule(
        "date",
        [r"invoice\s+date", r"date\s+of\s+issue", r"issue\s+date", r"(?<!due )date"],
        description="Invoice date",
    ),
    amount_rule(
        "amount",
        [
            r"total\s+amount",
            r"amount\s+due",
            r"total\s+due",
            r"balance\s+due",
            r"grand\s+total",
            r"total",
            r"amount",
        ],
        kind=ValueKind.DECIMAL_AMOUNT,
        description="Invoice total",
    ),
    text_rule(
        "client",
        [r"client\s+name", r"customer\s+name", r"client", r"customer", r"bill(?:ed)?\s+to"],
        description="Client or customer name",
    ),
)

# -----------------------------------------------------------------
# Employee report
# -----------------------------------------------------------------

EMPLOYEE_REPORT_RULES: tuple[FieldRule, ...] = (
    text_rule(
        "employeeName",
        [r"employee\s+name", r"full\s+name", r"employee", r"name"],
        description="Employee full name",
    ),
    text_rule("department", [r"department", r"dept\.?"], description="Department"),
    text_rule(
        "position",
        [r"job\s+title", r"position", r"title", r"role"],
        description="Job title",
    ),
    amount_rule("salary", [r"annual\s+salary", r"salary", r"wage"], description="Annual salary"),
    text_rule(
        "performanceScore",
        [r"performance\s+(?:score|rating)", r"performance", r"score", r"rating"],
        description="Performance score, kept as text",
        token=DECIMAL_TEXT_TOKEN,
    ),
    date_rule(
        "startDate",
        [r"start\s+date", r"hire\s+date", r"date\s+of\s+hire", r"date\s+hired"],
        description="Employment start date",
    ),
)

# -----------------------------------------------------------------
# Relevance keywords
# -----------------------------------------------------------------

RELEVANCE_KEYWORDS: dict[SchemaId, tuple[str, ...]] = {
    SchemaId.INCOME_STATEMENT: (
        "revenue", "income", "profit", "loss", "expense", "cost", "sales",
        "cogs", "operating", "net", "gross", "ebitda", "margin", "financial",
    ),
    SchemaId.COMPREHENSIVE_FINANCIAL: (
        "revenue", "income", "profit", "loss", "expense", "cost", "sales",
        "assets", "liabilities", "equity", "cash", "debt", "balance", "statement",
        "depreciation", "amortization", "tax", "interest", "dividend",
    ),
    SchemaId.BALANCE_SHEET: (
        "assets", "liabilities", "equity", "cash", "receivable", "payable",
        "inventory", "debt", "capital", "retained", "current", "non-current",
    ),
    SchemaId.INVOICE: (
        "invoice", "bill", "amount", "total", "client", "customer", "date",
        "payment", "due", "service", "product", "quantity", "price",
    ),
    SchemaId.EMPLOYEE_REPORT: (
        "employee", "staff", "salary", "wage", "performance", "department",
        "position", "hire", "review", "rating", "bonus", "benefits",
    ),
}
