# apps/api/cms/schemas/site_config.py
# Public-site configuration objects. Every field has a default, so a fresh
# database (no site_settings rows) still renders complete pages.
from __future__ import annotations
from typing import List, Literal

from pydantic import BaseModel, ConfigDict


class AboutStat(BaseModel):
    icon: str
    value: str
    label: str

class JourneyItem(BaseModel):
    year: str
    title: str
    description: str

class NavigationLink(BaseModel):
    id: str
    label: str
    url: str
    order: int = 0
    is_active: bool = True


class AboutConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    hero_title: str = "About Astro Forge Holdings"
    hero_subtitle: str = (
        "Building tomorrow's infrastructure through innovation, sustainability, "
        "and strategic investment across multiple sectors."
    )
    hero_enabled: bool = True
    vision_title: str = "Our Vision"
    vision_content: str = (
        "We envision a future where innovation drives sustainable progress "
        "across all sectors of society."
    )
    vision_enabled: bool = True
    stats_enabled: bool = True
    journey_title: str = "Our Journey"
    journey_subtitle: str = "From humble beginnings to global impact."
    journey_enabled: bool = True
    stats: List[AboutStat] = [
        AboutStat(icon="Users", value="500+", label="Team Members"),
        AboutStat(icon="Target", value="50+", label="Projects Completed"),
        AboutStat(icon="Award", value="15+", label="Years Experience"),
        AboutStat(icon="Globe", value="10+", label="Countries Served"),
    ]
    timeline: List[JourneyItem] = [
        JourneyItem(year="2008", title="Foundation", description="Founded with a vision to revolutionize multiple industries."),
        JourneyItem(year="2016", title="Sustainability Initiative", description="Launched sustainability programs across all divisions."),
        JourneyItem(year="2023", title="Global Presence", description="Expanded operations internationally."),
    ]


class ContactConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    email: str = "info@astroforge.com"
    phone: str = "+1 (555) 123-4567"
    address: str = "123 Corporate Drive, Business District"
    hours: str = "Mon - Fri: 9:00 AM - 6:00 PM"


class HeroConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    title: str = "ASTRO FORGE HOLDINGS"
    subtitle: str = "Building Tomorrow's Infrastructure Through Innovation, Sustainability, and Strategic Investment"
    cta_text: str = "Discover More"
    cta_link: str = "/about"
    background_images: List[str] = ["/placeholder.svg", "/placeholder.svg", "/placeholder.svg"]
    badge_text: str = "Innovation • Sustainability • Growth"
    stats_projects: str = "500+"
    stats_countries: str = "50+"
    stats_years: str = "25+"


class HeaderConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    logo_url: str = "/astroforge-uploads/AstroForgeHoldings-Logo.png"
    company_name: str = "Astro Forge Holdings"
    tagline: str = "Building tomorrow's infrastructure"
    show_services_dropdown: bool = True
    show_theme_toggle: bool = True
    navigation_links: List[NavigationLink] = [
        NavigationLink(id="1", label="Home", url="/", order=1),
        NavigationLink(id="2", label="About Us", url="/about", order=2),
        NavigationLink(id="3", label="Projects", url="/projects", order=3),
        NavigationLink(id="4", label="Careers", url="/careers", order=4),
        NavigationLink(id="5", label="Blog", url="/blog", order=5),
        NavigationLink(id="6", label="Contact", url="/contact", order=6),
    ]


class FooterConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    text: str = "© 2024 Astro Forge Holdings. All rights reserved."


class SiteConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    title: str = "Astro Forge Holdings - Professional Services"
    description: str = "Leading provider of professional services with expertise and dedication"


class SocialLinksConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    facebook: str = ""
    twitter: str = ""
    linkedin: str = ""
    instagram: str = ""


class ThemeConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    theme: Literal["light", "dark", "auto"] = "auto"
    primary_color: str = "#3B82F6"
    accent_color: str = "#F59E0B"
    astro_blue: str = "#0066cc"
    astro_gold: str = "#f0a500"
    astro_white: str = "#ffffff"
    astro_accent: str = "#007bff"
