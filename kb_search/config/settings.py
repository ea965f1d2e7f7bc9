
from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    docs_path: str = "./knowledge-base"

    search_max_results: int = 5
    search_fuzzy_match: bool = True
    search_priority_boost: bool = True
    fuzzy_max_distance: int = 2

    # Snippets
    max_snippets: int = 3
    min_sentence_length: int = 10

    suggestions_limit: int = 10

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
