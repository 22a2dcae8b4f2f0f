import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from finance_tracker.api import accounts, auth, categories, reports, transactions
from finance_tracker.core.config import CORS_ORIGINS, LOG_LEVEL
from finance_tracker.database import create_db_and_tables

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    yield

app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Mismo cuerpo que ValidationError: 400 con la lista de campos
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        if field not in fields:
            fields.append(field)
    logger.debug(f"request_validation_failed: path={request.url.path} fields={fields}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {
                "message": "Campos inválidos o faltantes",
                "fields": fields,
                "errors": jsonable_encoder(exc.errors()),
            }
        },
    )


app.include_router(auth.router)
app.include_router(transactions.router)
app.include_router(accounts.router)
app.include_router(categories.router)
app.include_router(reports.router)

@app.get("/")
def root():
    return {"message": "Servidor de finanzas personales"}
