def main() -> None:
    """Entry point for the application: serve the API with uvicorn."""
    from faculty_portfolio.api.main import main as api_main

    api_main()
