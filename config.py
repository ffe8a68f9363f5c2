import os
from dotenv import load_dotenv
load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///scoutboard.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = os.getenv("WTF_CSRF_ENABLED", "1") not in ("0", "false", "False")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # 候補者検索
    SEARCH_PAGE_SIZE = int(os.getenv("SEARCH_PAGE_SIZE", "10"))

    # 注目ラベル判定
    ATTENTION_LOGIN_HOURS = int(os.getenv("ATTENTION_LOGIN_HOURS", "72"))
    ATTENTION_MIN_SCOUTS = int(os.getenv("ATTENTION_MIN_SCOUTS", "5"))
    ATTENTION_MIN_REPLIES = int(os.getenv("ATTENTION_MIN_REPLIES", "1"))


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    LOG_LEVEL = "DEBUG"
