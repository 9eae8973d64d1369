"""Block strategies — which construction rule each template token uses.

Adding a new block-type token is a data change: map it to an existing
strategy here and the BlockBuilder picks it up.
"""

from __future__ import annotations

from enum import Enum

from training_engine.models.enums import BlockType


class BlockStrategy(str, Enum):
    WARMUP = "warmup"
    STRENGTH = "strength"
    METABOLIC = "metabolic"
    COOLDOWN = "cooldown"
    MOBILITY = "mobility"
    ACCESSORY = "accessory"
    DYNAMIC_SUPERSET = "dynamic_superset"


BLOCK_STRATEGIES: dict[BlockType, BlockStrategy] = {
    BlockType.WARMUP: BlockStrategy.WARMUP,
    BlockType.GENTLE_WARMUP: BlockStrategy.WARMUP,
    BlockType.STRENGTH: BlockStrategy.STRENGTH,
    BlockType.STRENGTH_SUPERSET: BlockStrategy.STRENGTH,
    BlockType.COMPOUND_STRENGTH: BlockStrategy.STRENGTH,
    BlockType.CARDIO: BlockStrategy.METABOLIC,
    BlockType.METABOLIC_CIRCUIT: BlockStrategy.METABOLIC,
    BlockType.HIIT_INTERVALS: BlockStrategy.METABOLIC,
    BlockType.CARDIO_INTERVALS: BlockStrategy.METABOLIC,
    BlockType.COOLDOWN: BlockStrategy.COOLDOWN,
    BlockType.DEEP_STRETCH: BlockStrategy.COOLDOWN,
    BlockType.MOBILITY_FLOW: BlockStrategy.MOBILITY,
    BlockType.ACCESSORY_WORK: BlockStrategy.ACCESSORY,
    BlockType.DYNAMIC_SUPERSET: BlockStrategy.DYNAMIC_SUPERSET,
}

BLOCK_NAMES: dict[BlockStrategy, str] = {
    BlockStrategy.WARMUP: "Dynamic Warm-up",
    BlockStrategy.STRENGTH: "Strength & Power",
    BlockStrategy.METABOLIC: "Metabolic Conditioning Circuit",
    BlockStrategy.COOLDOWN: "Cool-down & Recovery",
    BlockStrategy.MOBILITY: "Mobility & Movement Flow",
    BlockStrategy.ACCESSORY: "Accessory & Isolation",
    BlockStrategy.DYNAMIC_SUPERSET: "Dynamic Superset Complex ({count} supersets)",
}


def get_strategy(block_type: BlockType) -> BlockStrategy:
    """Look up the strategy for a block type; unmapped types build strength."""
    return BLOCK_STRATEGIES.get(block_type, BlockStrategy.STRENGTH)
