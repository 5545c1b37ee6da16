import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from tripsplit.api.v1.routes.report import router as report_router
from tripsplit.api.v1.routes.system import router as system_router
from tripsplit.api.v1.routes.transaction import router as transaction_router
from tripsplit.api.v1.routes.trip import router as trip_router
from tripsplit.api.v1.routes.user import router as user_router
from tripsplit.core.config import settings
from tripsplit.core.db_check import wait_for_db
from tripsplit.core.exceptions import InvalidExpenseError, NoExpensesError, SettlementError
from tripsplit.core.logging import configure_logging
from tripsplit.schemas.common import fail

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    await wait_for_db(retries=settings.DB_CONNECT_RETRIES)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)


@app.exception_handler(HTTPException)
async def http_error(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content=fail(str(exc.detail)))

@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    problems = [
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    return JSONResponse(status_code=422, content=fail("; ".join(problems)))

@app.exception_handler(NoExpensesError)
async def no_expenses(request: Request, exc: NoExpensesError):
    return JSONResponse(status_code=404, content=fail(str(exc)))

@app.exception_handler(InvalidExpenseError)
async def invalid_expense(request: Request, exc: InvalidExpenseError):
    return JSONResponse(status_code=422, content=fail(str(exc)))

@app.exception_handler(SettlementError)
async def settlement_failed(request: Request, exc: SettlementError):
    logger.error("Settlement failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content=fail("Could not compute settlements"))


@app.get("/")
async def root():
    return {
        "success": True,
        "message": "Welcome to the Expense Splitter API!",
        "version": "1.0"
    }

app.include_router(system_router, prefix="/api/v1/system")
app.include_router(user_router, prefix="/api/v1/users")
app.include_router(trip_router, prefix="/api/v1/trips")
app.include_router(transaction_router, prefix="/api/v1/transactions")
app.include_router(report_router, prefix="/api/v1/reports")
