"""Run the shower tracker web widget with uvicorn."""


def main() -> None:
    import uvicorn

    from shower_tracker.app import create_app
    from shower_tracker.config import AppConfig

    config = AppConfig.from_env()
    uvicorn.run(create_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    main()
