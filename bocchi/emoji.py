"""Emoji ids accepted by the emoji-reaction API."""

from __future__ import annotations

from enum import IntEnum

# QQ built-in faces: name followed by its numeric face id.
_QQ_FACES = """
得意 4 流泪 5 睡 8 大哭 9 尴尬 10 调皮 12 微笑 14 酷 16 可爱 21 傲慢 23
饥饿 24 困 25 惊恐 26 流汗 27 憨笑 28 悠闲 29 奋斗 30 疑问 32 嘘 33 晕 34
敲打 38 再见 39 发抖 41 爱情 42 跳跳 43 拥抱 49 蛋糕 53 咖啡 60 玫瑰 63 爱心 66
太阳 74 月亮 75 赞 76 握手 78 胜利 79 飞吻 85 西瓜 89 冷汗 96 擦汗 97 抠鼻 98
鼓掌 99 糗大了 100 坏笑 101 左哼哼 102 右哼哼 103 哈欠 104 委屈 106 左亲亲 109
可怜 111 示爱 116 抱拳 118 拳头 120 爱你 122 NO 123 OK 124 转圈 125 挥手 129
喝彩 144 棒棒糖 147 茶 171 泪奔 173 无奈 174 卖萌 175 小纠结 176 doge 179
惊喜 180 骚扰 181 笑哭 182 我最美 183 点赞 201 托脸 203 托腮 212 啵啵 214
蹭一蹭 219 抱抱 222 拍手 227 佛系 232 喷脸 240 甩头 243 加油抱抱 246 脑阔疼 262
捂脸 264 辣眼睛 265 哦哟 266 头秃 267 问号脸 268 暗中观察 269 emm 270 吃瓜 271
呵呵哒 272 我酸了 273 汪汪 277 汗 278 无眼笑 281 敬礼 282 面无表情 284 摸鱼 285
哦 287 睁眼 289 敲开心 290 摸锦鲤 293 期待 294 拜谢 297 元宝 298 牛啊 299
右亲亲 305 牛气冲天 306 喵喵 307 仔细分析 314 加油 315 崇拜 318 比心 319
庆祝 320 拒绝 322 吃糖 324 生气 326
"""

# Unicode emoji: name immediately followed by the character; the id is its code point.
_UNICODE_EMOJI = """
晴天☀ 咖啡☕ 可爱☺ 闪光✨ 错误❌ 问号❔ 玫瑰🌹 西瓜🍉 苹果🍎 草莓🍓
拉面🍜 面包🍞 刨冰🍧 啤酒🍺 干杯🍻 庆祝🎉 虫🐛 牛🐮 鲸鱼🐳 猴🐵
拳头👊 好的👌 厉害👍 鼓掌👏 内衣👙 男孩👦 爸爸👨 爱心💓 礼物💝 睡觉💤
水💦 吹气💨 肌肉💪 邮箱📫 火🔥 呲牙😁 激动😂 高兴😄 嘿嘿😊 羞涩😌
哼哼😏 不屑😒 汗😓 失落😔 飞吻😘 亲亲😚 淘气😜 吐舌😝 大哭😭 紧张😰
瞪眼😳
"""


def _members() -> list[tuple[str, int]]:
    words = _QQ_FACES.split()
    faces = [(f"{name}_1", int(value)) for name, value in zip(words[::2], words[1::2])]
    emoji = []
    for entry in _UNICODE_EMOJI.split():
        entry = entry.replace("\ufe0f", "")
        emoji.append((f"{entry[:-1]}_2", ord(entry[-1])))
    return faces + emoji


class _EmojiBase(IntEnum):
    @property
    def id(self) -> int:
        """The numeric id sent to the server."""
        return int(self)


Emoji = _EmojiBase("Emoji", _members(), module=__name__)
Emoji.__doc__ = "Reaction ids; names ending in _1 are QQ faces, _2 are Unicode emoji."