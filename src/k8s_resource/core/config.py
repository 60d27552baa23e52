# src/k8s_resource/core/config.py

import logging
import os

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

    # --- Snapshot files ---
    SNAPSHOT_DIR = os.getenv("SNAPSHOT_DIR", ".")

    # Threshold in cores below which a burstable node's reported CPU total is
    # considered missing when rendering the node table.
    BURSTABLE_CPU_EPSILON = float(os.getenv("BURSTABLE_CPU_EPSILON", "0.1"))

    # --- Provisioning assessment (percent) ---
    UNDER_UTILIZED_THRESHOLD = float(os.getenv("UNDER_UTILIZED_THRESHOLD", "30"))
    OVER_PROVISIONED_THRESHOLD = float(os.getenv("OVER_PROVISIONED_THRESHOLD", "80"))

    # BURSTABLE_NODE_PREFIX is a property so the value is resolved at access
    # time, letting callers change the environment after import.
    @property
    def BURSTABLE_NODE_PREFIX(self) -> str:
        return os.getenv("BURSTABLE_NODE_PREFIX", "fargate-")

    def validate_instance(self):
        for name in ("UNDER_UTILIZED_THRESHOLD", "OVER_PROVISIONED_THRESHOLD"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be between 0 and 100, got {value}.")
        if self.UNDER_UTILIZED_THRESHOLD > self.OVER_PROVISIONED_THRESHOLD:
            raise ValueError("UNDER_UTILIZED_THRESHOLD must not exceed OVER_PROVISIONED_THRESHOLD.")
        if self.BURSTABLE_CPU_EPSILON < 0:
            raise ValueError("BURSTABLE_CPU_EPSILON must be non-negative.")
        if not self.BURSTABLE_NODE_PREFIX:
            logging.getLogger(__name__).warning(
                "BURSTABLE_NODE_PREFIX is empty; every node will be treated as burstable."
            )


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
