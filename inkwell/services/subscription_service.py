import logging

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from inkwell.models.subscription import Subscription

logger = logging.getLogger(__name__)


class SubscriptionService:
    def __init__(self, db: Session):
        self.db = db

    def subscribe(self, email: str) -> bool:
        """Store ``email`` unless it is already subscribed. Returns True when a row was added."""
        stmt = (
            insert(Subscription)
            .values(email=email)
            .on_conflict_do_nothing(index_elements=[Subscription.email])
            .returning(Subscription.id)
        )

        result = self.db.execute(stmt)
        self.db.commit()
        created = result.scalar_one_or_none() is not None
        if not created:
            logger.debug(f"{email} is already subscribed")
        return created
