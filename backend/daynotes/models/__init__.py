# Import every model so relationship("User") / relationship("Note") resolve
# no matter which module is imported first.
from daynotes.models.user import User  # noqa: F401
from daynotes.models.note import DEFAULT_NOTE_TIME, Note, NoteStatus  # noqa: F401
