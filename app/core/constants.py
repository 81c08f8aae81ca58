"""Application constants.

School options offered at registration and the Google Sheets layout of the
registration mirror.
"""

# ---------------------------------------------------------------------------
# Schools
# ---------------------------------------------------------------------------
OTHER_SCHOOL: str = "altro"

SCHOOL_OPTIONS: list[dict[str, str]] = [
    {"value": "Liceo Scientifico A. Einstein", "label": "Liceo Scientifico A. Einstein"},
    {"value": "Liceo Classico G. Cesare - M. Valgimigli", "label": "Liceo Classico G. Cesare - M. Valgimigli"},
    {"value": "ITTS O. Belluzzi - L. Da Vinci", "label": "ITTS O. Belluzzi - L. Da Vinci"},
    {"value": "Liceo Artistico Serpieri", "label": "Liceo Artistico Serpieri"},
    {"value": "Istituto Tecnico R. Valturio", "label": "Istituto Tecnico R. Valturio"},
    {"value": "IPSIA L.B. Alberti", "label": "IPSIA L.B. Alberti"},
    {"value": "ISISS P. Gobetti - A. De Gasperi (Morciano)", "label": "ISISS P. Gobetti - A. De Gasperi (Morciano)"},
    {"value": OTHER_SCHOOL, "label": "Altro (Specifica)"},
]

# ---------------------------------------------------------------------------
# Google Sheets mirror
# Header: UID | Nome | Cognome | Email | Scuola | Data Nascita | Check-in Timestamp
# ---------------------------------------------------------------------------
SHEETS_API_BASE: str = "https://sheets.googleapis.com/v4/spreadsheets"
SHEETS_SCOPE: str = "https://www.googleapis.com/auth/spreadsheets"
SHEETS_VALUE_INPUT_OPTION: str = "USER_ENTERED"

ROW_RANGE_COLUMNS: str = "A:G"
UID_COLUMN: str = "A"
CHECKIN_COLUMN: str = "G"

PROFILES_TABLE: str = "profiles"
