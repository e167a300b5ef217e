import argparse
import logging
import sys
from typing import Optional, Sequence

from PyQt6.QtWidgets import QApplication, QMessageBox

from models.profile import Profile, Role
from services.alert_feed import broadcast_hub
from services.realtime_feed import RealtimeFeed
from services.service_container import BackendServices
from ui.admin_dashboard import MainWindow
from ui.courier import DeliveryWindow
from utils.config import AppConfig, load_config
from utils.exceptions import ConfigError, GatewayError
from utils.logging_setup import configure_logging
from utils.version import get_version

logger = logging.getLogger("dispatchdesk")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dispatchdesk",
        description="Courier delivery page and admin dashboard.",
    )
    parser.add_argument("--courier", metavar="TOKEN", help="open the delivery page for this courier token")
    parser.add_argument(
        "--role",
        choices=[role.value for role in Role],
        default=Role.OWNER.value,
        help="admin role to use when no profile id is given (default: owner)",
    )
    parser.add_argument("--profile-id", help="load the signed-in profile from the backend")
    parser.add_argument("--log-file", help="also write debug logs to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    return parser


def resolve_profile(services: BackendServices, profile_id: Optional[str], role: str) -> Profile:
    """Backend profile when an id is given, otherwise a local one for ``role``."""

    if profile_id:
        profile = services.profiles.get_profile(profile_id)
        if profile is None:
            raise GatewayError("NOT_FOUND", f"Profile {profile_id} not found")
        return profile
    return Profile.local(Role(role))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config: AppConfig = load_config()
    except ConfigError as exc:
        configure_logging("INFO")
        logger.error("%s", exc)
        return 2
    configure_logging(config.log_level, args.log_file)
    logger.info("Starting dispatchdesk %s", get_version())

    app = QApplication(sys.argv[:1])
    services = BackendServices.from_config(config)

    if args.courier is not None:
        window = DeliveryWindow(
            services.courier,
            args.courier,
            realtime=RealtimeFeed.from_config(config, broadcast_hub()),
            alert_hide_ms=config.alert_hide_ms,
        )
    else:
        try:
            profile = resolve_profile(services, args.profile_id, args.role)
        except GatewayError as exc:
            logger.error("Could not load profile: %s", exc)
            QMessageBox.critical(None, "Admin Dashboard", exc.message)
            return 1
        window = MainWindow(services, profile, config)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
