import uuid


def new_entry_id() -> str:
    return str(uuid.uuid4())
