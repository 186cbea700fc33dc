"""Geographic fragments for address fields."""

CITIES = (
    "北京", "上海", "广州", "深圳", "杭州", "南京", "苏州", "成都", "重庆", "武汉",
    "西安", "天津", "青岛", "大连", "宁波", "厦门", "福州", "济南", "长沙", "郑州",
)

DISTRICTS = (
    "东城区", "西城区", "朝阳区", "海淀区", "丰台区", "石景山区", "门头沟区", "房山区",
)

ADDRESS_STREETS = (
    "中山路", "人民路", "解放路", "建设路", "胜利路", "和平路", "友谊路", "光明路",
)

ENGLISH_STREETS = (
    "Main St", "Park Ave", "Oak St", "Pine St",
    "Maple Ave", "Cedar St", "Elm St", "Washington St",
)

ENGLISH_CITIES = (
    "New York", "Los Angeles", "Chicago", "Houston", "Phoenix", "Philadelphia",
)

US_STATES = ("NY", "CA", "IL", "TX", "AZ", "PA")
