import uvicorn


def main() -> None:
    """Run the IP lookup service with uvicorn."""
    uvicorn.run(
        "ipinfo_lookup.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
