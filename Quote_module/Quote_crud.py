from sqlalchemy.orm import Session
import logging

from .Quote_model import Quote

logger = logging.getLogger(__name__)


def create_quote(db: Session, values: dict) -> Quote:
    """Insert a quote row and return it with its assigned id."""
    quote = Quote(**values)
    db.add(quote)
    db.commit()
    db.refresh(quote)
    logger.info(f"Quote created: id={quote.id}, event={quote.event_name!r}")
    return quote


def list_quotes(db: Session) -> list[Quote]:
    """All quotes, newest id first."""
    return list(db.query(Quote).order_by(Quote.id.desc()).all())


def delete_quote(db: Session, quote_id: int) -> bool:
    """Delete the quote with the given id. Returns False when no such row exists."""
    deleted = db.query(Quote).filter(Quote.id == quote_id).delete(synchronize_session=False)
    db.commit()
    if deleted:
        logger.info(f"Quote deleted: id={quote_id}")
    return bool(deleted)
