"""
Free-text answer classification for the intake script.

The session state machine only talks to AnswerClassifier; the keyword
implementation below is best-effort substring matching. Answers it does not
recognize produce an empty delta, never an error.
"""
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from app.models.enums import DeductionType, FilingStatus, IncomeType, IntakeStep

EMAIL_MARKER = "@"
PHONE_PATTERN = re.compile(r"\d{3}[-.\s]?\d{3}[-.\s]?\d{4}")
DATE_PATTERN = re.compile(
    r"\b(\d{1,2}[/-]\d{1,2}[/-]\d{2,4}|\d{4}-\d{1,2}-\d{1,2}|"
    r"(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s+\d{1,2},?\s+\d{4})\b",
    re.IGNORECASE
)
STATE_ZIP_PATTERN = re.compile(r"\b([A-Za-z]{2})\s+(\d{5}(?:-\d{4})?)\b")
WORD_PATTERN = re.compile(r"[a-z]+")

# (keywords, value) pairs; first match wins
FILING_STATUS_KEYWORDS = (
    (("single",), FilingStatus.SINGLE),
    (("jointly",), FilingStatus.MARRIED_FILING_JOINTLY),
    (("separately",), FilingStatus.MARRIED_FILING_SEPARATELY),
    (("head",), FilingStatus.HEAD_OF_HOUSEHOLD),
    (("widow",), FilingStatus.QUALIFYING_WIDOW),
    (("married",), FilingStatus.MARRIED_FILING_JOINTLY),
)

# (keywords, tags, flags); every matching rule applies
INCOME_RULES = (
    (("w2", "w-2"), (IncomeType.WAGES_W2,), ()),
    (("1099", "freelance", "contractor"), (IncomeType.SELF_EMPLOYMENT_1099NEC,), ()),
    (("uber", "lyft", "doordash", "gig"), (IncomeType.GIG_ECONOMY,), ()),
    (("rental", "property"), (IncomeType.RENTAL_INCOME,), ("has_rental_property",)),
    (("invest", "stock", "dividend"), (IncomeType.INVESTMENT_INCOME, IncomeType.DIVIDENDS), ()),
    (("capital gain",), (IncomeType.CAPITAL_GAINS,), ()),
    (("crypto", "bitcoin"), (IncomeType.CRYPTO_INCOME,), ("has_crypto",)),
    (("retirement", "pension", "401k"), (IncomeType.RETIREMENT_DISTRIBUTIONS,), ()),
    (("social security",), (IncomeType.SOCIAL_SECURITY,), ()),
    (("unemployment",), (IncomeType.UNEMPLOYMENT,), ()),
    (("alimony",), (IncomeType.ALIMONY_RECEIVED,), ()),
    (("gambling", "lottery", "casino"), (IncomeType.GAMBLING_WINNINGS,), ()),
    (("foreign",), (IncomeType.FOREIGN_INCOME,), ("has_foreign_accounts",)),
)

DEDUCTION_RULES = (
    (("mortgage",), (DeductionType.MORTGAGE_INTEREST,), ()),
    (("property tax",), (DeductionType.PROPERTY_TAXES,), ()),
    (("state tax", "local tax", "salt"), (DeductionType.STATE_LOCAL_TAXES,), ()),
    (("charit", "donat"), (DeductionType.CHARITABLE_DONATIONS,), ()),
    (("medical",), (DeductionType.MEDICAL_EXPENSES,), ()),
    (("student loan",), (DeductionType.STUDENT_LOAN_INTEREST,), ()),
    (("educator", "classroom"), (DeductionType.EDUCATOR_EXPENSES,), ()),
    (("401k", "ira", "retirement"), (DeductionType.CONTRIBUTIONS_401K, DeductionType.IRA_CONTRIBUTIONS), ()),
    (("hsa", "health savings"), (DeductionType.HSA_CONTRIBUTIONS,), ()),
    (("home office",), (DeductionType.HOME_OFFICE,), ()),
    (("business expense",), (DeductionType.BUSINESS_EXPENSES,), ("has_business_income",)),
    (("childcare", "daycare"), (DeductionType.CHILDCARE_EXPENSES,), ()),
)

SPECIAL_SITUATION_RULES = (
    (("crypto", "bitcoin"), (IncomeType.CRYPTO_INCOME,), ("has_crypto",)),
    (("foreign",), (IncomeType.FOREIGN_INCOME,), ("has_foreign_accounts",)),
    (("rental", "real estate"), (), ("has_rental_property",)),
    (("health insurance", "marketplace", "1095"), (), ("has_health_insurance",)),
)

SELF_EMPLOYMENT_KEYWORDS = ("self-employ", "self employ", "freelance", "own business")

# Employer name fragment -> display name
GIG_PLATFORMS = (
    ("uber", "Uber"),
    ("lyft", "Lyft"),
    ("doordash", "DoorDash"),
)


@dataclass
class AttributeDelta:
    """
    Attribute changes inferred from one answer.

    fields are plain assignments; the list attributes are merged into the
    client's existing values without duplicates.
    """
    fields: Dict[str, Any] = field(default_factory=dict)
    income_types: List[str] = field(default_factory=list)
    deductions: List[str] = field(default_factory=list)
    dependents: List[Dict[str, Any]] = field(default_factory=list)
    employment_info: List[Dict[str, Any]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.fields or self.income_types or self.deductions
                    or self.dependents or self.employment_info)

    def add_income(self, *tags):
        for tag in tags:
            value = getattr(tag, "value", tag)
            if value not in self.income_types:
                self.income_types.append(value)

    def add_deduction(self, *tags):
        for tag in tags:
            value = getattr(tag, "value", tag)
            if value not in self.deductions:
                self.deductions.append(value)

    def set_flags(self, *flags):
        for flag in flags:
            self.fields[flag] = True


class AnswerClassifier(ABC):
    """Turns a free-text answer for a step into attribute changes"""

    @abstractmethod
    def classify(self, step: IntakeStep, answer: str) -> AttributeDelta:
        ...

    @abstractmethod
    def ends_step(self, step: IntakeStep, answer: str) -> bool:
        """True when the answer closes the step before all its questions are asked"""
        ...


def _matches(text: str, keywords) -> bool:
    return any(keyword in text for keyword in keywords)


def _apply_rules(delta: AttributeDelta, text: str, rules, deductions: bool = False):
    for keywords, tags, flags in rules:
        if _matches(text, keywords):
            if deductions:
                delta.add_deduction(*tags)
            else:
                delta.add_income(*tags)
            delta.set_flags(*flags)


def parse_address(text: str) -> Dict[str, Optional[str]]:
    """'123 Main St, Springfield, IL 62701' -> street/city/state/zip"""
    parts = [part.strip() for part in text.split(",") if part.strip()]
    address = {"street": parts[0] if parts else text.strip(), "city": None, "state": None, "zip": None}
    if len(parts) >= 2:
        address["city"] = parts[1] if len(parts) >= 3 else None
        match = STATE_ZIP_PATTERN.search(parts[-1])
        if match:
            address["state"] = match.group(1).upper()
            address["zip"] = match.group(2)
        elif len(parts) == 2:
            address["city"] = parts[1]
    return address


def parse_dependent(entry: str) -> Optional[Dict[str, Any]]:
    """
    'Emma Smith, daughter, 03/15/2015, 12' -> dependent record.

    Entries without a date-shaped field are not dependents.
    """
    parts = [part.strip() for part in entry.split(",")]
    date_index = next((i for i, part in enumerate(parts) if DATE_PATTERN.search(part)), None)
    if date_index is None or date_index == 0:
        return None

    names = parts[0].split()
    months = 12
    for part in parts[date_index + 1:]:
        digits = re.search(r"\d+", part)
        if digits:
            months = min(int(digits.group()), 12)
            break

    return {
        "first_name": names[0] if names else "",
        "last_name": " ".join(names[1:]),
        "relationship": parts[1] if date_index > 1 else "",
        "date_of_birth": parts[date_index],
        "months_lived_with": months,
    }


def parse_employers(text: str) -> List[Dict[str, Any]]:
    """Employer records for gig platforms and segments marked W-2 or 1099"""
    records = []
    lower = text.lower()
    for fragment, name in GIG_PLATFORMS:
        if fragment in lower:
            records.append({"employer": name, "income_type": IncomeType.GIG_ECONOMY.value, "current": True})

    for segment in re.split(r",|;|\band\b", text):
        segment_lower = segment.lower()
        if _matches(segment_lower, [fragment for fragment, _ in GIG_PLATFORMS]):
            continue
        if _matches(segment_lower, ("w2", "w-2")):
            income_type = IncomeType.WAGES_W2
        elif "1099" in segment_lower:
            income_type = IncomeType.SELF_EMPLOYMENT_1099NEC
        else:
            continue
        employer = re.sub(r"\(?\b(w-?2|1099)\b\)?", "", segment, flags=re.IGNORECASE)
        employer = re.sub(r"\b(employee|contractor|as an?|as|from|at)\b", "", employer, flags=re.IGNORECASE)
        employer = " ".join(employer.split()).strip(" -:")
        if employer:
            records.append({"employer": employer, "income_type": income_type.value, "current": True})
    return records


class KeywordAnswerClassifier(AnswerClassifier):
    """Substring and regex heuristics per intake step"""

    def classify(self, step: IntakeStep, answer: str) -> AttributeDelta:
        handler = getattr(self, f"_classify_{IntakeStep(step).value}", None)
        delta = AttributeDelta()
        if handler is not None and answer and answer.strip():
            handler(answer.strip(), answer.strip().lower(), delta)
        return delta

    def ends_step(self, step: IntakeStep, answer: str) -> bool:
        lower = (answer or "").lower()
        if step == IntakeStep.DEPENDENTS:
            # Whole words, so "know" does not count as "no"
            words = set(WORD_PATTERN.findall(lower))
            return "no" in words or "none" in words
        if step == IntakeStep.SPECIAL_SITUATIONS:
            # Substring check: "none" satisfies both conditions
            return "no" in lower and "none" in lower
        return False

    def _classify_personal_info(self, text, lower, delta):
        if EMAIL_MARKER in text:
            delta.fields["email"] = text
        elif PHONE_PATTERN.search(text):
            delta.fields["phone"] = text
        elif DATE_PATTERN.search(text):
            delta.fields["date_of_birth"] = DATE_PATTERN.search(text).group(0)
        elif re.search(r"\d", text) and re.search(r"[A-Za-z]", text):
            delta.fields["address"] = parse_address(text)
        elif " " in text and not re.search(r"\d", text):
            first, _, last = text.partition(" ")
            delta.fields["first_name"] = first
            delta.fields["last_name"] = last.strip()

    def _classify_filing_status(self, text, lower, delta):
        for keywords, status in FILING_STATUS_KEYWORDS:
            if _matches(lower, keywords):
                delta.fields["filing_status"] = status
                return

    def _classify_dependents(self, text, lower, delta):
        for entry in re.split(r"[;\n]", text):
            dependent = parse_dependent(entry)
            if dependent:
                delta.dependents.append(dependent)

    def _classify_employment(self, text, lower, delta):
        records = parse_employers(text)
        delta.employment_info.extend(records)
        for record in records:
            delta.add_income(record["income_type"])
        if _matches(lower, ("w2", "w-2")):
            delta.add_income(IncomeType.WAGES_W2)
        if _matches(lower, ("1099", "contractor")):
            delta.add_income(IncomeType.SELF_EMPLOYMENT_1099NEC)
        if _matches(lower, SELF_EMPLOYMENT_KEYWORDS):
            delta.add_income(IncomeType.SELF_EMPLOYMENT_1099NEC)
            delta.set_flags("has_business_income")

    def _classify_income_types(self, text, lower, delta):
        _apply_rules(delta, lower, INCOME_RULES)

    def _classify_deductions(self, text, lower, delta):
        _apply_rules(delta, lower, DEDUCTION_RULES, deductions=True)

    def _classify_special_situations(self, text, lower, delta):
        _apply_rules(delta, lower, SPECIAL_SITUATION_RULES)


def _merge_records(existing: List[Dict[str, Any]], new: List[Dict[str, Any]], key) -> List[Dict[str, Any]]:
    merged = list(existing or [])
    seen = {key(record) for record in merged}
    for record in new:
        if key(record) not in seen:
            merged.append(record)
            seen.add(key(record))
    return merged


def delta_updates(client, delta: AttributeDelta) -> Dict[str, Any]:
    """
    Client column updates for a delta.

    List attributes come back as new lists (existing values first) so the
    JSON columns register the change.
    """
    updates = dict(delta.fields)
    if delta.income_types:
        updates["income_types"] = list(dict.fromkeys([*(client.income_types or []), *delta.income_types]))
    if delta.deductions:
        updates["deductions"] = list(dict.fromkeys([*(client.deductions or []), *delta.deductions]))
    if delta.dependents:
        updates["dependents"] = _merge_records(
            client.dependents, delta.dependents,
            key=lambda d: (d["first_name"].lower(), d["last_name"].lower(), d["date_of_birth"])
        )
    if delta.employment_info:
        updates["employment_info"] = _merge_records(
            client.employment_info, delta.employment_info,
            key=lambda e: e["employer"].lower()
        )
    return updates


default_classifier = KeywordAnswerClassifier()
