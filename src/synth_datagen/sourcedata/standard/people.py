"""Name parts for person-name fields."""

CHINESE_SURNAMES = (
    "张", "王", "李", "赵", "刘", "陈", "杨", "黄", "周", "吴",
    "徐", "孙", "胡", "朱", "高", "林", "何", "郭", "马", "罗",
)

CHINESE_GIVEN_NAMES = (
    "伟", "芳", "娜", "敏", "静", "丽", "强", "磊", "军", "洋", "勇",
    "艳", "杰", "涛", "明", "超", "秀英", "霞", "平", "刚", "桂英",
)

ENGLISH_FIRST_NAMES = (
    "John", "Jane", "Michael", "Sarah", "David",
    "Lisa", "Chris", "Amy", "Mark", "Emily",
)

ENGLISH_LAST_NAMES = (
    "Smith", "Johnson", "Brown", "Davis", "Miller",
    "Wilson", "Moore", "Taylor", "Anderson", "Thomas",
)

# Fixed pick list; english names are never composed from parts
ENGLISH_FULL_NAMES = tuple(
    f"{first} {last}" for first in ENGLISH_FIRST_NAMES for last in ENGLISH_LAST_NAMES
)
