# routes.py
from fastapi import FastAPI
from controller.question_controller import question_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(question_router)
