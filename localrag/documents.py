from typing import List
from pydantic import BaseModel


class Document(BaseModel):
    title: str
    content: str

    @property
    def embed_text(self) -> str:
        # "Seoul Tower - Seoul Tower is a communication and observation tower ..."
        return f"{self.title} - {self.content}"


SAMPLE_DOCUMENTS: List[Document] = [
    Document(title="Seoul Tower",
             content="Seoul Tower is a communication and observation tower located on Namsan Mountain in central Seoul, South Korea."),
    Document(title="Gwanghwamun Gate",
             content="Gwanghwamun is the main and largest gate of Gyeongbokgung Palace, in Jongno-gu, Seoul, South Korea."),
    Document(title="Bukchon Hanok Village",
             content="Bukchon Hanok Village is a Korean traditional village in Seoul with a long history."),
    Document(title="Myeong-dong Shopping Street",
             content="Myeong-dong is one of the primary shopping districts in Seoul, South Korea."),
    Document(title="Dongdaemun Design Plaza",
             content="The Dongdaemun Design Plaza is a major urban development landmark in Seoul, South Korea."),
]
