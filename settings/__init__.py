"""Application settings."""

import os
from pathlib import Path

# Spreadsheets
SPREADSHEET_ID = os.getenv("CRM_SPREADSHEET_ID", "")
AUTH_SPREADSHEET_ID = os.getenv("CRM_AUTH_SPREADSHEET_ID") or SPREADSHEET_ID

# Logging
LOG_DIR = Path(os.getenv("CRM_LOG_DIR", "logs"))
LOG_LEVEL = os.getenv("CRM_LOG_LEVEL", "INFO")

# API
SHEETS_API_BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"
SHEETS_API_TIMEOUT = 30
SHEETS_ACCESS_TOKEN = os.getenv("CRM_SHEETS_ACCESS_TOKEN", "")
MAX_CONCURRENT = 5

# Cache
CACHE_TTL_SECONDS = int(os.getenv("CRM_CACHE_TTL_SECONDS", "30"))

# Pagination
CONTACTS_PER_PAGE = 20
INTERACTIONS_PER_PAGE = 20
OPPORTUNITIES_PER_PAGE = 10
COMPANIES_PER_PAGE = 20

TIMEZONE = os.getenv("CRM_TIMEZONE", "Asia/Taipei")

# Sheet (tab) names
SHEET_CONTACTS = "原始名片資料"
SHEET_CONTACT_LIST = "聯絡人總表"
SHEET_OPP_CONTACT_LINK = "機會-聯絡人關聯表"
SHEET_COMPANIES = "公司總表"
SHEET_OPPORTUNITIES = "機會案件"
SHEET_INTERACTIONS = "互動紀錄"
SHEET_EVENT_LOGS = "事件紀錄總表"
SHEET_ANNOUNCEMENTS = "佈告欄"
SHEET_WEEKLY_BUSINESS = "週間業務工作表"
SHEET_SYSTEM_CONFIG = "系統設定"
SHEET_USERS = "使用者名冊"
