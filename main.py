import logging

from attendance_dashboard.ui import run_app


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    run_app()

if __name__ == "__main__":
    main()
