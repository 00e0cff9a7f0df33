import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from wellness.core.config import get_settings
from wellness.database import create_db_and_tables
from wellness.routers import auth, users
from wellness.routers import clients, services, packages
from wellness.routers import appointments, session_notes
from wellness.routers import payments, client_packages
from wellness.routers import dashboard

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Wellness Practice API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(clients.router)
app.include_router(services.router)
app.include_router(packages.router)
app.include_router(appointments.router)
app.include_router(session_notes.router)
app.include_router(payments.router)
app.include_router(client_packages.router)
app.include_router(dashboard.router)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    # sem retry: o erro volta para quem chamou
    logger.error("Erro de banco em %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Erro ao acessar o banco de dados"})


@app.on_event("startup")
def on_startup():
    create_db_and_tables()


@app.get("/")
def root():
    return {"message": "API wellness funcionando 🚀"}
