import uvicorn

from patient_api.config import settings


def main():
    """Run the API server."""
    uvicorn.run(
        "patient_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    main()
