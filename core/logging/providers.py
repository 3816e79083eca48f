import logging
import sys
from typing import Annotated
from dishka import Provider, provide, Scope, FromComponent
from core.environment.config import Settings

LOGGER_NAME = "tokenhub_api"

# Per-request RPC tracing from web3 and its transports
NOISY_LOGGERS = ("web3.providers", "web3.manager", "web3.RequestManager", "urllib3", "aiohttp")


class LoggerProvider(Provider):
    """
    Provider for the service logger.

    Log records go to stdout at `LOG_LEVEL`. RPC transport loggers stay at
    WARNING unless the service itself runs at DEBUG.
    """
    component = "logger"

    @provide(scope=Scope.APP)
    def get_logger(
        self,
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> logging.Logger:
        """
        Configure logging once and return the service logger.

        Parameters
        ----------
        settings : Settings
            Application settings

        Returns
        -------
        logging.Logger
            `tokenhub_api` logger
        """
        level = logging.getLevelName(settings.log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO

        if not logging.getLogger().handlers:
            logging.basicConfig(
                level=level,
                format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                handlers=[logging.StreamHandler(sys.stdout)]
            )

        if level > logging.DEBUG:
            for name in NOISY_LOGGERS:
                logging.getLogger(name).setLevel(logging.WARNING)

        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(level)
        return logger
