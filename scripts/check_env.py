from dotenv import load_dotenv
import os

load_dotenv()

keys = [
    "EMAIL",
    "PASSWORD",
    "API_KEY",
    "OKANJO_API_BASE_URL",
    "OKANJO_TIMEOUT_S",
    "OKANJO_INSTANCE_IDS",
    "REPORT_WINDOW_DAYS",
    "OUTPUT_JSON_PATH",
    "OUTPUT_CSV_PATH",
    "LOG_LEVEL",
]

for k in keys: 
    print(f"{k} = ", "SET" if os.getenv(k) else "MISSING")
