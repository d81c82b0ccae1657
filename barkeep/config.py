from functools import lru_cache

from pydantic import Field
from pydantic_settings import SettingsConfigDict, BaseSettings


class EngineSettings(BaseSettings):
    pour_rate: float = Field(30.0, gt=0, validation_alias="BARKEEP_POUR_RATE")
    aim_min_alignment: float = Field(0.85, ge=-1.0, le=1.0, validation_alias="BARKEEP_AIM_MIN_ALIGNMENT")
    aim_max_distance: float = Field(1.5, gt=0, validation_alias="BARKEEP_AIM_MAX_DISTANCE")
    progress_hide_delay: float = Field(5.0, ge=0, validation_alias="BARKEEP_PROGRESS_HIDE_DELAY")

    shake_mix_threshold: float = Field(2.0, ge=0, validation_alias="BARKEEP_SHAKE_MIX_THRESHOLD")
    shake_frequency: float = Field(20.0, gt=0, validation_alias="BARKEEP_SHAKE_FREQUENCY")
    shake_amplitude: float = Field(0.05, ge=0, validation_alias="BARKEEP_SHAKE_AMPLITUDE")
    shake_tilt_frequency: float = Field(15.0, gt=0, validation_alias="BARKEEP_SHAKE_TILT_FREQUENCY")
    shake_tilt_amplitude: float = Field(0.03, ge=0, validation_alias="BARKEEP_SHAKE_TILT_AMPLITUDE")

    drink_duration: float = Field(1.0, gt=0, validation_alias="BARKEEP_DRINK_DURATION")

    prune_epsilon: float = Field(0.01, ge=0, validation_alias="BARKEEP_PRUNE_EPSILON")
    default_capacity: float = Field(300.0, gt=0, validation_alias="BARKEEP_DEFAULT_CAPACITY")

    log_ring_size: int = Field(200, gt=0, validation_alias="BARKEEP_LOG_RING_SIZE")
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> EngineSettings:
    return EngineSettings()
