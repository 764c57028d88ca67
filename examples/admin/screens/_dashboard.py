CONFIG = {
    "position": 0,
    "description": "Campaign activity at a glance.",
    "data": {"site_name": "CampaignBridge"},
}
