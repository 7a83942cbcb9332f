GCP_CHANNELS = [
    # Google Cloud Blog (https://cloudblog.withgoogle.com/rss)
    "Solutions & Technology",
    "AI & Machine Learning",
    "API Management",
    "Application Development",
    "Application Modernization",
    "Chrome Enterprise",
    "Compute",
    "Containers & Kubernetes",
    "Data Analytics",
    "Databases",
    "DevOps & SRE",
    "Maps & Geospatial",
    "Security",
    "Security & Identity",
    "Threat Intelligence",
    "Infrastructure",
    "Infrastructure Modernization",
    "Networking",
    "Productivity & Collaboration",
    "SAP on Google Cloud",
    "Storage & Data Transfer",
    "Sustainability",
    "Ecosystem",
    "IT Leaders",
    "Industries",
    "Financial Services",
    "Healthcare & Life Sciences",
    "Manufacturing",
    "Media & Entertainment",
    "Public Sector",
    "Retail",
    "Supply Chain",
    "Telecommunications",
    "Partners",
    "Startups & SMB",
    "Training & Certifications",
    "Inside Google Cloud",
    "Google Cloud Next & Events",
    "Google Cloud Consulting",
    "Google Maps Platform",
    "Google Workspace",
    "Developers & Practitioners",
    "Transform with Google Cloud",
]

GWS_CHANNELS = [
    # Google Workspace Updates (https://workspaceupdates.googleblog.com/feeds/posts/default)
    # Comms & Meetings
    "Comms & Meetings", "Gmail", "Google Chat", "Google Calendar", "Google Tasks",
    "Google Groups", "Google Meet", "Google Meet hardware", "Google Voice",
    # Content & Collaboration
    "Content & Collaboration", "Google Drive", "Google Docs", "Google Sheets",
    "Google Slides", "Google Forms", "Google Keep", "Google Sites", "Google Vids",
    # Gemini
    "Gemini", "Gemini App", "NotebookLM",
    # Admin & Security
    "Admin & Security", "Admin console", "Security and Compliance", "Directory Sync",
    "Google Workspace Migrate", "Google Vault", "Identity", "MDM", "SSO",
    # Education
    "Education", "Google Workspace for Education", "Google Classroom",
    # More
    "More", "Google Workspace Marketplace", "API", "Google Apps Script", "AppSheet",
    "Mobile", "iOS", "Android", "Beta", "Additional Google services", "Other",
    "Google Workspace Add-ons",
]

CHANNEL_CATALOGS = {
    "gcp": GCP_CHANNELS,
    "gws": GWS_CHANNELS,
}
