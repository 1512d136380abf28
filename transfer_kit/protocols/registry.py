"""
Wire encoder registry

Maps chain selector variants to the encoder for that chain family.
"""

import logging
from typing import Dict, Type

from ..errors import ConfigurationError
from ..types import ChainSelector
from .base import WireEncoder

logger = logging.getLogger(__name__)


class EncoderRegistry:
    """
    Registry of wire encoders keyed by selector type

    Instances are explicitly constructed and owned by the caller; there is
    no process-wide registry.

    Usage:
        registry = EncoderRegistry()
        registry.register(EvmNetwork, EvmWireEncoder(gas, sender))
        registry.register(SolanaNetwork, SolanaWireEncoder(sender))

        encoder = registry.for_selector(request.selector)
    """

    def __init__(self):
        self._encoders: Dict[type, WireEncoder] = {}

    def register(self, selector_type: Type, encoder: WireEncoder):
        """
        Register the encoder for a selector variant

        Args:
            selector_type: EvmNetwork or SolanaNetwork
            encoder: Encoder instance
        """
        self._encoders[selector_type] = encoder
        logger.debug(f"Registered {encoder.name} encoder for {selector_type.__name__}")

    def for_selector(self, selector: ChainSelector) -> WireEncoder:
        """
        Get the encoder for a selector

        Raises:
            ConfigurationError: If no encoder is registered for the variant
        """
        encoder = self._encoders.get(type(selector))
        if encoder is None:
            available = ", ".join(t.__name__ for t in self._encoders) or "none"
            raise ConfigurationError.invalid(
                "selector", f"No encoder for {type(selector).__name__}. Available: {available}"
            )
        return encoder

    def is_registered(self, selector_type: Type) -> bool:
        return selector_type in self._encoders

    def list(self) -> list:
        """List registered encoder names"""
        return [encoder.name for encoder in self._encoders.values()]
