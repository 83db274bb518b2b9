import logging
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError

from shortfeed.core.database import SessionLocal
from shortfeed.core.exceptions import StoreUnavailable
from shortfeed.models.video import Video

logger = logging.getLogger(__name__)


class VideoStore:
    """Read-only access to the first-party `videos` table."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def get_all_videos(self) -> list[Video]:
        """All rows, newest (highest id) first. The session is always closed."""
        db = None
        try:
            db = self.session_factory()
            return db.query(Video).order_by(desc(Video.id)).all()
        except SQLAlchemyError as e:
            logger.error(f"❌ Store query failed: {e}")
            raise StoreUnavailable(str(e)) from e
        finally:
            if db is not None:
                db.close()
