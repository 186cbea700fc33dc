"""Domains, URL parts, phone prefixes and color names."""

EMAIL_DOMAINS = (
    "gmail.com", "163.com", "qq.com", "126.com",
    "sina.com", "hotmail.com", "yahoo.com", "outlook.com",
)

URL_PROTOCOLS = ("http", "https")
URL_DOMAINS = ("example.com", "test.com", "demo.org", "sample.net")
URL_PATHS = ("", "/home", "/about", "/contact", "/products", "/services")

MOBILE_PREFIXES_CN = (
    "130", "131", "132", "133", "134", "135", "136", "137", "138", "139",
    "150", "151", "152", "153", "155", "156", "157", "158", "159",
    "180", "181", "182", "183", "184", "185", "186", "187", "188", "189",
)

COLOR_NAMES = (
    "red", "blue", "green", "yellow", "orange", "purple", "pink",
    "brown", "black", "white", "gray", "cyan", "magenta",
)
