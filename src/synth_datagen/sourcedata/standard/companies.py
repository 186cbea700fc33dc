"""Company name fragments."""

CHINESE_COMPANY_PREFIXES = (
    "华为", "腾讯", "阿里巴巴", "百度", "京东", "美团", "滴滴", "字节跳动", "小米", "海尔",
)

CHINESE_COMPANY_SUFFIXES = (
    "有限公司", "股份有限公司", "科技有限公司", "贸易有限公司",
    "投资有限公司", "集团有限公司", "实业有限公司", "发展有限公司",
)

ENGLISH_COMPANY_PREFIXES = (
    "Tech", "Global", "Advanced", "Smart", "Digital",
    "Future", "Innovation", "Dynamic", "Premier", "Elite",
)

ENGLISH_COMPANY_SUFFIXES = (
    " Corp", " Inc", " LLC", " Ltd", " Technologies",
    " Solutions", " Systems", " Group", " Enterprises", " Industries",
)
