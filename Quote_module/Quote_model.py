"""
Quote model - one rental inquiry submitted through the public quote form.
"""
from sqlalchemy import Column, Integer, Text

from database import Base


class Quote(Base):
    """
    Stores a quote request: event details, LED requirements and the contact person.
    Rows are written once and only ever read or deleted afterwards.

    Column names are the lowercase form of the API field names, which is what
    both SQLite and PostgreSQL fold unquoted identifiers to.
    """

    __tablename__ = "quotes"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_name = Column("eventname", Text, nullable=False)
    event_date = Column("eventdate", Text, nullable=False)
    event_place = Column("eventplace", Text, nullable=False)
    event_duration = Column("eventduration", Text, default="")
    led_type = Column("ledtype", Text, default="")
    led_size = Column("ledsize", Text, default="")
    led_content = Column("ledcontent", Text, default="")
    power = Column("power", Text, default="")
    extra = Column("extra", Text, default="")
    contact_name = Column("contactname", Text, nullable=False)
    contact_company = Column("contactcompany", Text, default="")
    contact_phone = Column("contactphone", Text, nullable=False)
    contact_email = Column("contactemail", Text, nullable=False)
    created_at = Column("createdat", Text, nullable=False)
