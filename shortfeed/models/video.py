from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, func
from shortfeed.core.database import Base

class Video(Base):
    __tablename__ = "videos"

    id = Column(Integer, primary_key=True, index=True)

    video_url = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    username = Column(String(255), nullable=False)

    likes_count = Column(Integer, nullable=False, default=0, server_default="0")
    shares_count = Column(Integer, nullable=False, default=0, server_default="0")

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
