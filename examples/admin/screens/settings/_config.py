CONFIG = {
    "menu_title": "CB Settings",
    "page_title": "CampaignBridge Settings",
    "description": "Sender identity and integrations.",
    "tabs": {
        "general": {"order": 1, "description": "Sender name and addresses"},
        "mailchimp": {"order": 2, "label": "Mailchimp", "description": "API key and audience"},
    },
}
