import uvicorn

from .main import PORT


def main() -> None:
    uvicorn.run("employee_service.main:app", host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    main()
