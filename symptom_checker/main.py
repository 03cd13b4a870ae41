# Run from project root: uvicorn symptom_checker.main:app --reload

import logging

from fastapi import FastAPI

from symptom_checker.api.handlers import add_cors, register_exception_handlers
from symptom_checker.api.routes import router

logging.basicConfig(level=logging.INFO)


app = FastAPI(title="AI Health Symptom Checker Relay")
add_cors(app)
register_exception_handlers(app)
app.include_router(router)
