"""Row layout of the registration mirror sheet.

Columns ``A:G``: UID | Nome | Cognome | Email | Scuola | Data Nascita |
Check-in Timestamp.
"""

from pydantic import BaseModel


class SheetRow(BaseModel):
    uid: str
    first_name: str
    last_name: str
    email: str
    school: str
    dob: str
    checkin_timestamp: str = ""

    def to_values(self) -> list[str]:
        """Return the cell values in column order."""
        return [
            self.uid,
            self.first_name,
            self.last_name,
            self.email,
            self.school,
            self.dob,
            self.checkin_timestamp,
        ]
