"""Keyword classifiers for job titles and training programs.

First match wins: each name is lower-cased and tested against an ordered
list of (substring, label) pairs. Unmatched names always land in "Other",
so both classifiers are pure functions of their input.
"""

OTHER = "Other"

DEPARTMENT_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("admin", "Administration"),
    ("data entry", "Administration"),
    ("secretar", "Administration"),
    ("receptionist", "Administration"),
    ("assistant", "Administration"),
    ("financ", "Finance"),
    ("account", "Finance"),
    ("bookkeep", "Finance"),
    ("bank", "Finance"),
    ("teller", "Finance"),
    ("payroll", "Finance"),
    ("customer", "Customer Support"),
    ("service rep", "Customer Support"),
    ("call centre", "Customer Support"),
    ("call center", "Customer Support"),
    ("software", "IT"),
    ("developer", "IT"),
    ("programmer", "IT"),
    ("network", "IT"),
    ("computer", "IT"),
    ("data", "IT"),
    ("clerk", "Operations"),
    ("mail", "Operations"),
    ("courier", "Operations"),
    ("warehouse", "Operations"),
    ("operat", "Operations"),
    ("logistic", "Operations"),
)

PROGRAM_CATEGORY_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("digital", "Digital Skills"),
    ("data", "Technical Training"),
    ("cloud", "Technical Training"),
    ("cyber", "Technical Training"),
    ("programming", "Technical Training"),
    ("software", "Technical Training"),
    ("technical", "Technical Training"),
    ("leader", "Leadership"),
    ("manage", "Leadership"),
    ("communicat", "Soft Skills"),
    ("writing", "Soft Skills"),
    ("customer", "Soft Skills"),
    ("soft skill", "Soft Skills"),
)


def classify(name: str | None, keywords: tuple[tuple[str, str], ...]) -> str:
    """Return the label of the first keyword found in ``name``."""
    text = (name or "").lower()
    for keyword, label in keywords:
        if keyword in text:
            return label
    return OTHER


def classify_department(job_title: str | None) -> str:
    return classify(job_title, DEPARTMENT_KEYWORDS)


def classify_program_category(program: str | None) -> str:
    return classify(program, PROGRAM_CATEGORY_KEYWORDS)
