from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from app.core.config import settings
from app.core.logging import configure_logging
from app.endpoints import notification, notification_preferences, notification_template
from app.middleware.exceptions import global_exception_handler, validation_exception_handler
from app.middleware.logging import RequestLoggingMiddleware

configure_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(HTTPException, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(notification.router, prefix=f"{settings.API_PREFIX}/notifications", tags=["Notifications"])
app.include_router(notification_preferences.router, prefix=f"{settings.API_PREFIX}/notification-preferences", tags=["Notification Preferences"])
app.include_router(notification_template.router, prefix=f"{settings.API_PREFIX}/notification-templates", tags=["Notification Templates"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
