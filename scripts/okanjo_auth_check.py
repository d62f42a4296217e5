from dotenv import load_dotenv

from commission_report.extract.okanjo.commission_report import okanjo_session
from commission_report.extract.okanjo.okanjo_client import OkanjoClient
from commission_report.extract.okanjo.okanjo_config import load_okanjo_config

load_dotenv()

cfg = load_okanjo_config()
client = OkanjoClient(cfg)

with okanjo_session(client, cfg.email, cfg.password) as session:
    print("Okanjo auth check OK. Account:", session.account_id)

print("Session deleted.")
