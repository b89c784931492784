from typing import Literal

from pydantic import BaseModel, Field


class LayoutSettings(BaseModel):
    headerStyle: Literal["simple", "centered", "sidebar"] = "simple"
    showSidebar: bool = False
    sidebarPosition: Literal["left", "right"] = "right"
    footerStyle: Literal["simple", "detailed"] = "simple"


class AppearanceSettings(BaseModel):
    theme: Literal["light", "dark", "system"] = "system"
    primaryColor: str = "#3B82F6"
    accentColor: str = "#8B5CF6"
    fontFamily: str = "Inter, sans-serif"
    fontSize: Literal["small", "medium", "large"] = "medium"
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    customCSS: str = ""


class SocialLinks(BaseModel):
    twitter: str = ""
    facebook: str = ""
    instagram: str = ""
    github: str = ""


class SeoSettings(BaseModel):
    metaTitle: str = "My Blog - Latest Posts and Updates"
    metaDescription: str = (
        "Stay updated with the latest posts and insights from our blog"
    )
    keywords: str = "blog, technology, programming, web development"


class ContentSettings(BaseModel):
    postsPerPage: int = 10
    showExcerpts: bool = True
    showAuthor: bool = True
    showDate: bool = True
    showReadTime: bool = True


class FooterSettings(BaseModel):
    copyrightText: str = "© 2024 My Blog. All rights reserved."
    showSocialLinks: bool = True


class SiteSettings(BaseModel):
    siteName: str = "My Blog"
    siteDescription: str = "A modern blog platform"
    siteUrl: str = "https://myblog.com"
    adminEmail: str = "admin@myblog.com"
    favicon: str = "/logo.svg"
    socialLinks: SocialLinks = Field(default_factory=SocialLinks)
    seo: SeoSettings = Field(default_factory=SeoSettings)
    content: ContentSettings = Field(default_factory=ContentSettings)
    footer: FooterSettings = Field(default_factory=FooterSettings)


class PublicSettings(BaseModel):
    site: SiteSettings
    appearance: AppearanceSettings
