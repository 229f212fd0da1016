"""Rule tables for owner-name classification.

Plain data only. The classifier compiles these into patterns once at import
time; extend a table here rather than adding another branch in code.
"""

# Legal boilerplate stripped before classification. Longer phrases first so
# "ET UXOR" wins over "ET UX".
NOISE_PHRASES: tuple[str, ...] = (
    r"ET\.?\s*UXOR",
    r"ET\.?\s*UX",
    r"ET\.?\s*VIR",
    r"ET\.?\s*AL",
    r"ETAL",
    r"CO[-\s]?TRUSTEES?",
    r"CO[-\s]?TTEES?",
    r"TRUSTEES?",
    r"TTEES?",
    r"U/D/T",
    r"U/A",
    r"A/K/A",
    r"AKA",
    r"FBO",
    r"C/O",
)

# Percentage interest fragments: "50%", "33.3 %", "25% INTEREST".
PERCENT_INTEREST = r"\d{1,3}(?:\.\d+)?\s*%(?:\s+INTEREST)?"

# Whole strings that mean "no owner on file".
SENTINELS: frozenset[str] = frozenset({
    "UNKNOWN",
    "UNKNOWN OWNER",
    "N/A",
    "NONE",
})

# Organizational keywords. Periods are optional when matching, so "L.L.C"
# also covers "L.L.C." and "LLC".
COMPANY_KEYWORDS: tuple[str, ...] = (
    # Legal forms
    "LLC", "L.L.C", "INC", "INCORPORATED", "CORP", "CORPORATION", "CO",
    "COMPANY", "COMPANIES", "LTD", "LIMITED", "LP", "L.P", "LLP", "L.L.P",
    "PLLC", "P.L.L.C", "PLC", "PC", "P.A", "N.A", "LLLP",
    # Trusts and funds
    "TRUST", "TR", "TRS", "FUND", "REIT", "ESTATE", "HEIRS",
    # Business descriptors
    "HOLDINGS", "HOLDING", "PROPERTIES", "MANAGEMENT", "GROUP", "PARTNERS",
    "PARTNERSHIP", "ASSOCIATES", "ENTERPRISES", "INVESTMENTS", "INVESTMENT",
    "VENTURES", "CAPITAL", "REALTY", "DEVELOPMENT", "DEVELOPERS", "BUILDERS",
    "HOMES", "SOLUTIONS", "SERVICES", "ALLIANCE", "MORTGAGE", "SAVINGS",
    # Finance
    "BANK", "BANCORP", "FINANCIAL",
    # Institutions
    "FOUNDATION", "ASSOCIATION", "ASSN", "AUTHORITY", "DISTRICT", "COUNTY",
    "CITY", "STATE", "FEDERAL", "DEPARTMENT", "DEPT", "BOARD", "COMMISSION",
    "CHURCH", "MINISTRIES", "SCHOOL", "UNIVERSITY", "COLLEGE", "HOSPITAL",
    "CLUB", "SOCIETY", "INSTITUTE", "CONDOMINIUM", "CONDO", "HOA",
    # Multi-word phrases
    "REAL ESTATE", "CREDIT UNION", "UNITED STATES", "HOMEOWNERS ASSOCIATION",
)

# Generational suffixes dropped from the end of a person's token list.
GENERATIONAL_SUFFIXES: frozenset[str] = frozenset({
    "JR", "SR", "II", "III", "IV", "V",
})

# Common given names. A hit on the second token pushes "SMITH JOHN" toward
# the Last-First reading even without a comma.
COMMON_FIRST_NAMES: frozenset[str] = frozenset({
    "AARON", "ALAN", "ALBERT", "ALICE", "AMANDA", "AMY", "ANDREA", "ANDREW",
    "ANGELA", "ANN", "ANNA", "ANNE", "ANTHONY", "ARTHUR", "BARBARA", "BETTY",
    "BEVERLY", "BOBBY", "BRANDON", "BRENDA", "BRIAN", "BRUCE", "CAROL",
    "CAROLYN", "CATHERINE", "CHARLES", "CHERYL", "CHRISTINA", "CHRISTINE",
    "CHRISTOPHER", "CYNTHIA", "DANIEL", "DAVID", "DEBORAH", "DEBRA", "DENISE",
    "DENNIS", "DIANE", "DONALD", "DONNA", "DOROTHY", "DOUGLAS", "EDWARD",
    "ELIZABETH", "EMILY", "ERIC", "FRANK", "GARY", "GEORGE", "GERALD",
    "GLORIA", "GREGORY", "HAROLD", "HEATHER", "HELEN", "HENRY", "JACK",
    "JACQUELINE", "JAMES", "JANE", "JANET", "JANICE", "JASON", "JEAN",
    "JEFFREY", "JENNIFER", "JEREMY", "JERRY", "JESSICA", "JOAN", "JOE",
    "JOHN", "JONATHAN", "JOSE", "JOSEPH", "JOSHUA", "JOYCE", "JUAN", "JUDITH",
    "JUDY", "JULIE", "JUSTIN", "KAREN", "KATHERINE", "KATHLEEN", "KATHY",
    "KEITH", "KELLY", "KENNETH", "KEVIN", "KIMBERLY", "LARRY", "LAURA",
    "LINDA", "LISA", "LORI", "MARGARET", "MARIA", "MARIE", "MARILYN", "MARK",
    "MARTHA", "MARY", "MATTHEW", "MELISSA", "MICHAEL", "MICHELLE", "NANCY",
    "NICHOLAS", "PAMELA", "PATRICIA", "PATRICK", "PAUL", "PETER", "RACHEL",
    "RALPH", "RAYMOND", "REBECCA", "RICHARD", "ROBERT", "ROGER", "RONALD",
    "ROSE", "RUTH", "RYAN", "SANDRA", "SARA", "SARAH", "SCOTT", "SHARON",
    "SHIRLEY", "STEPHANIE", "STEPHEN", "STEVEN", "SUSAN", "TERESA", "TERRY",
    "THERESA", "THOMAS", "TIMOTHY", "VIRGINIA", "WALTER", "WAYNE", "WILLIAM",
})
