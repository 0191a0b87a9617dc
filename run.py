import argparse
import uvicorn
from app.core.config import settings
from app.db.init_db import create_all_tables

def main():
    parser = argparse.ArgumentParser(description="Run the forum server")
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to listen on (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8080,
        help="Port to listen on (default: 8080)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on code changes (always on when DEBUG is set)"
    )
    parser.add_argument(
        "--init-db-only",
        action="store_true",
        help="Create tables and seed categories, then exit without serving"
    )

    args = parser.parse_args()

    if args.init_db_only:
        raise SystemExit(0 if create_all_tables() else 1)

    use_reload = args.reload or settings.DEBUG

    if settings.DEBUG:
        print(f"Starting {settings.PROJECT_NAME} {settings.VERSION} ({settings.ENVIRONMENT})")
        print(f"Database: {settings.DATABASE_URL}")
        print(f"Forum available at http://localhost:{args.port}/")

    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        reload=use_reload
    )

if __name__ == "__main__":
    main()
