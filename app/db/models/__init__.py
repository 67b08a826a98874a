from app.db.models.user import User
from app.db.models.tag import Tag
from app.db.models.counter import Counter
from app.db.models.counter_tag import CounterTag

__all__ = ["User", "Tag", "Counter", "CounterTag"]
