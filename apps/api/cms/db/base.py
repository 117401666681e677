# apps/api/cms/db/base.py
from sqlalchemy.orm import declarative_base

# Tüm tablo modelleri buradan extend eder
Base = declarative_base()
