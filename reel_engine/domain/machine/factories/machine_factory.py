# reel_engine/domain/machine/factories/machine_factory.py
import logging
import os
from typing import Dict, Any, Optional

from ..entities.slot_machine import SlotMachine


class MachineFactory:
    """
    Factory for creating SlotMachine instances.
    """
    def __init__(self, rng_provider=None):
        """
        Args:
            rng_provider: Optional RNG provider for creating RNG strategies
        """
        self.logger = logging.getLogger("domain.machine.factory")
        self.rng_provider = rng_provider

    def create_machine(self, machine_id: str, config: Dict[str, Any]) -> SlotMachine:
        """
        Create a new slot machine instance.

        Args:
            machine_id: Unique identifier for the machine
            config: Game configuration dictionary

        Returns:
            Initialized SlotMachine instance
        """
        self.logger.info(f"Creating slot machine: {machine_id}")

        rng_strategy = None
        if self.rng_provider:
            rng_config = config.get("rng", {}) or {}
            rng_strategy = self.rng_provider.create_from_config(rng_config)
            self.logger.debug(
                f"Using RNG strategy: {rng_config.get('strategy', 'mersenne')}, seed: {rng_config.get('seed')}"
            )
        else:
            self.logger.warning("No RNG provider available, machine will need RNG set later")

        return SlotMachine(machine_id, config, rng_strategy)

    def create_machine_from_file(self, config_loader, file_path: str,
                                 machine_id: Optional[str] = None,
                                 schema_path: Optional[str] = None) -> SlotMachine:
        """
        Create a machine from a configuration file.

        Args:
            config_loader: Configuration loader instance
            file_path: Path to configuration file
            machine_id: Optional explicit machine ID (overrides ID in config)
            schema_path: Optional JSON schema to validate against

        Returns:
            Initialized SlotMachine instance
        """
        self.logger.info(f"Creating machine from file: {file_path}")

        config = config_loader.load_file(file_path, schema_path)

        if machine_id is None:
            machine_id = config.get("machine_id") or os.path.splitext(os.path.basename(file_path))[0]

        return self.create_machine(machine_id, config)
