"""Preset read-aloud passages seeded into the default topic."""

from typing import Dict, Optional

# Preset passages (topic 1)
PASSAGES = [
    {
        'id': 1,
        'title': '慢慢说',
        'content': '说话不必太快。把每个字说清楚，别人才能听明白你的意思。',
        'difficulty': 1,
        'category': '表达',
    },
    {
        'id': 2,
        'title': '每天一点点',
        'content': '每天练习十分钟，坚持一个月，你会发现自己的表达流畅了很多。',
        'difficulty': 1,
        'category': '习惯',
    },
    {
        'id': 3,
        'title': '先说结论',
        'content': '汇报工作的时候，先说结论，再讲原因，最后补充细节，听的人更容易抓住重点。',
        'difficulty': 2,
        'category': '职场',
    },
    {
        'id': 4,
        'title': '停顿的力量',
        'content': '恰当的停顿不是卡壳，而是给听众思考的时间。重要的话说完以后，停一停。',
        'difficulty': 2,
        'category': '表达',
    },
    {
        'id': 5,
        'title': '读书的方法',
        'content': '读一本书，先看目录，了解作者的思路；再挑最感兴趣的章节精读，最后回过头来通读全书。',
        'difficulty': 3,
        'category': '学习',
    },
    {
        'id': 6,
        'title': '好问题',
        'content': '一个好问题往往比一个好答案更有价值。它能帮你看清真正需要解决的是什么。',
        'difficulty': 3,
        'category': '思考',
    },
    {
        'id': 7,
        'title': '复盘',
        'content': '做完一件事，花几分钟回顾：目标是什么，结果怎么样，哪里做得好，下次可以怎样改进。',
        'difficulty': 3,
        'category': '职场',
    },
    {
        'id': 8,
        'title': '听比说重要',
        'content': '沟通的一半是倾听。认真听完对方的话，再组织自己的回答，交流会顺畅得多。',
        'difficulty': 2,
        'category': '沟通',
    },
]


def get_passage_by_id(passage_id: int) -> Optional[Dict]:
    """Get a passage by its ID."""
    for passage in PASSAGES:
        if passage['id'] == passage_id:
            return passage
    return None
