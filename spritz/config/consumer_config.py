# spritz/config/consumer_config.py
from typing import Optional

from pydantic import BaseModel, Field


class ConsumerConfig(BaseModel):
    """
    EventConsumer 行为开关

    - batch_label : first header column of the report
    - strict      : default policy for add_event(event, batch_id)
    - concurrent  : finalize() uses process_concurrently()
    - max_workers : None -> one worker per batch
    - instrument  : time every batch finalize
    """

    batch_label: str = "ID"
    strict: bool = False
    concurrent: bool = False
    max_workers: Optional[int] = Field(default=None, ge=1)
    instrument: bool = False
