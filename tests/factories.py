from __future__ import annotations

from datetime import date

from contact_directory_api.app.schemas.contact import ContactCreate


def make_contact(name: str = "John Doe", email: str = "john@x.com", mobile: str = "1234567890",
                 dob: date = date(1990, 1, 15)) -> ContactCreate:
    return ContactCreate(name=name, email=email, mobile=mobile, dob=dob)


def contact_payload(name: str = "John Doe", email: str = "john@x.com", mobile: str = "1234567890",
                    dob: str = "1990-01-15") -> dict:
    return {"name": name, "email": email, "mobile": mobile, "dob": dob}
