from datetime import datetime
from typing import Optional

import attrs


@attrs.define
class Cinema:
    name: str
    city: str
    location: str = ''
    address: str = ''
    total_seats: int = 0
    image_url: str = ''
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
