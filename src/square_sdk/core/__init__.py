"""Request pipeline building blocks: schemas, codec, auth, retry, errors."""
