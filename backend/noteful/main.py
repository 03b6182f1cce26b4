from fastapi import FastAPI

from noteful import config
from noteful.api import auth, folders, notes, tags, users
from noteful.errors import register_exception_handlers
from noteful.utils.logging_setup import setup_logging

setup_logging(config.log_level())

app = FastAPI(title="Noteful API")
register_exception_handlers(app)

app.include_router(users.router)
app.include_router(auth.router)
app.include_router(notes.router)
app.include_router(folders.router)
app.include_router(tags.router)


@app.get("/health")
def health():
    return {"ok": True}
