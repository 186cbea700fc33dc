"""Character alphabets for text generation."""

from types import MappingProxyType

NUMBERS = "0123456789"
LOWERCASE_LETTERS = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LATIN_LETTERS = LOWERCASE_LETTERS + UPPERCASE_LETTERS

SPECIAL_CHARACTERS = "!@#$%^&*()_+-={}[]|;':\",./<>?`~\\/"

# Common simplified Chinese characters (frequency ordered sample)
CHINESE_CHARACTERS = (
    "的一是在不了有和人这中大为上个国我以要他时来用们生到作地于出就分对成会可主发年动"
    "同工也能下过子说产种面而方后多定行学法所民得经十三之进着等部度家电力里如水化高自"
    "二理起小物现实加量都两体制机当使点从业本去把性好应开它合还因由其些然前外天政四日"
    "那社义事平形相全表间样与关各重新线内数正心反你明看原又么利比或但质气第向道命此变"
    "条只没结解问意建月公无系军很情者最立代想已通并提直题党程展五果料象员革位入常文总"
    "次品式活设及管特件长求老头基资边流路级少图山统接知较将组见计别她手角期根论运农指"
    "几九区强放决西被干做必战先回则任取据处队南给色光门即保治北造百规热领七海口东导器"
    "压志世金增争济阶油思术极交受联什认六共权收证改清己美再采转更单风切打白教速花带安"
    "场身车例真务具万每目至达走积示议声报斗完类八离华名确才科张信马节话米整空元况今集"
    "温传土许步群广石记需段研界拉林律叫且究观越织装影算低持音众书布复容儿须际商非验连"
    "断深难近矿千周委素技备半办青省列习响约支般史感劳便团往酸历市克何除消构府称太准精"
    "值号率族维划选标写存候毛亲快效斯院查江型眼王按格养易置派层片始却专状育厂京识适属"
    "圆包火住调满县局照参红细引听该铁价严首底液官德随病苏失尔死讲配女黄推显谈罪神艺呢"
    "席含企望密批营项防举球英氧势告李台落木帮轮破亚师围注远字材排供河态封另施减树溶怎"
    "止案言士均武固叶鱼波视仅费紧爱左章早朝害续轻服试食充兵源判护司足某练差致板田降黑"
    "犯负击范继兴似余坚曲输修故城夫够送笔船占右财吃富春职觉汉画功巴跟虽杂飞检吸助升阳"
    "互初创抗考投坏策古径换未跑留钢曾端责站简述钱副尽帝射草冲承独令限阿宣环双请超微让"
    "控州良轴找否纪益依优顶础载倒房突坐粉敌略客袁冷胜绝析块剂测丝协诉念陈仍罗盐友洋错"
    "苦夜刑移频逐靠混母短皮终聚汽村云哪既距卫停烈央察烧迅境若印洲刻括激孔搞甚室待核校"
    "散侵吧甲游久菜味旧模湖货损预阻毫普稳乙妈植息扩银语挥酒守拿序纸医缺雨吗针刘啊急唱"
    "误训愿审附获茶鲜粮斤孩脱硫肥善龙演父渐血欢械掌歌沙著刀隐忍井"
)

_HIRAGANA = "".join(chr(code) for code in range(0x3041, 0x3097))
_KATAKANA = "".join(chr(code) for code in range(0x30A1, 0x30FB))
_COMMON_KANJI = (
    "一二三四五六七八九十百千万年月日時分秒人大小中上下左右前後東西南北山川田水火土木"
    "金銀白黒赤青緑黄紫橙茶灰生死愛友家族学校会社仕事休日食事料理美味世界国日本東京大"
    "阪名古屋京都神戸福岡札幌仙台広島長崎沖縄北海道本州四国九州"
)
JAPANESE_CHARACTERS = _HIRAGANA + _KATAKANA + _COMMON_KANJI

# Latin letters, digits and a handful of frequent Chinese characters
MIXED_CHARACTERS = LATIN_LETTERS + NUMBERS + "的一是在不了有和人这中大为上个国我以要他"

# Several entries are multi code point sequences, so this is a tuple
EMOJI = (
    "😀", "😃", "😄", "😁", "😆", "😅", "😂", "🤣", "😊", "😇",
    "🙂", "😉", "😌", "😍", "😘", "😗", "😙", "😚", "😋", "😛",
    "😝", "😜", "🤪", "🤨", "🧐", "🤓", "😎", "🤩", "😏", "😒",
    "😞", "😔", "😟", "😕", "🙁", "😣", "😖", "😫", "😩", "😢",
    "😭", "😤", "😠", "😡", "🤬", "🤯", "😳", "😱", "😨", "😰",
    "👍", "👎", "👌", "🤏", "✌", "🤞", "🤟", "🤘", "🤙", "👈",
    "👉", "👆", "👇", "☝", "👋", "🤚", "🖐", "✋", "🖖", "👏",
    "🙌", "🤝", "👐", "🤲", "🙏",
    "❤", "💛", "💚", "💙", "💜", "🖤", "💯", "💢", "💤", "💨",
    "🎈", "🎉", "🎊", "🎁", "🎀", "🎗", "🎃", "🎄", "🎆", "🎇",
    "✨", "🎯", "🎪", "🎭", "🎨", "🎬", "🎤", "🎧", "🎼", "🎵",
    "🎶", "🎮", "🕹", "🎲", "♠", "♥", "♦", "♣",
    "🍎", "🍊", "🍋", "🍌", "🍉", "🍇", "🍓", "🍈", "🍒", "🍑",
    "🍍", "🥝", "🍅", "🍞", "🥐", "🧀", "🥚", "🍳", "🥓", "🥞",
    "🐶", "🐱", "🐭", "🐹", "🐰", "🦊", "🐻", "🐼", "🐨", "🐯",
    "🦁", "🐮", "🐷", "🐸", "🐵", "🐔", "🐧", "🐦", "🐤", "🐣",
    "🐥", "🦆", "🦅", "🦉", "🦇", "🐺", "🐗", "🐴", "🦄", "🐝",
    "🐛", "🦋", "🐌", "🐞", "🐜", "🕷", "🦂", "🐢", "🐍", "🦎",
    "🌍", "🌎", "🌏", "🌕", "🌖", "🌗", "🌘", "🌑", "🌒", "🌓",
    "🌔", "🌙", "🌛", "🌜", "🌚", "🌝", "🌞", "⭐", "🌟", "💫",
    "⚡", "☄", "💥", "🔥", "🌪", "🌈", "☀", "⛅", "☁", "🌤",
    "⛈", "🌦", "🌧", "☔", "💧", "💦", "🌊",
    "⚽", "🏀", "🏈", "⚾", "🎾", "🏐", "🏉", "🎱", "🏓", "🏸",
    "🏒", "🏑", "🏏", "⛳", "🏹", "🎣", "🥊", "🥋",
)

# ASCII and kaomoji emoticons; drawn whole like emoji
EMOTICONS = tuple(
    (
        ":) :( :D :P :o :| ;) :/ :x :* <3 >:( :] :[ 8) B) :S :-) :-( :-D :-P "
        ":-| ;-) :-/ :-* >:-( :-] :-[ :-S 8-) B-) =) =( =D =P =| =/ =* >:) >:D "
        ">:P :3 >.< XD DX :O :s ^_^ ^^; -_- @_@ O_O T_T >_< =_= o_O 0_0 ^.^ "
        "*.* +_+ x_x @.@ OwO UwU >w< ^w^ -w- =w= ~_~ $_$ (^_^) (>_<) (T_T) "
        "(O_O) (@_@) (=_=) (-_-) (^.^) (*.*) (^w^) (OwO) (UwU) (>w<) (~_~) "
        "(｡◕‿◕｡) (◕‿◕) ╮(╯▽╰)╭ ¯\\_(ツ)_/¯ (ಠ_ಠ) (ಠ益ಠ) (╯°□°）╯︵┻━┻"
    ).split()
)

CHARACTER_POOLS = MappingProxyType(
    {
        "numbers": NUMBERS,
        "english": LATIN_LETTERS,
        "latin": LATIN_LETTERS,
        "lowercase": LOWERCASE_LETTERS,
        "uppercase": UPPERCASE_LETTERS,
        "chinese": CHINESE_CHARACTERS,
        "japanese": JAPANESE_CHARACTERS,
        "special": SPECIAL_CHARACTERS,
        "mixed": MIXED_CHARACTERS,
        "emoji": EMOJI,
        "emoticon": EMOTICONS,
    }
)
