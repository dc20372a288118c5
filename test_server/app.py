#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
本地测试服务器 - 模拟论坛帖子接口
用于测试章节链抓取，避免对真实论坛造成负担

    reddit-epub -t "测试连载" http://localhost:8080/r/testfic/comments/p1/part_1/
"""

from flask import Flask, abort, jsonify

app = Flask(__name__)

BASE_URL = 'http://localhost:8080'
SUBREDDIT = 'testfic'
AUTHOR = 'test_author'

# 模拟连载数据：每一篇都在结尾链接到下一篇
SERIES = []
for i in range(1, 4):
    SERIES.append({
        'id': f'p{i}',
        'slug': f'part_{i}',
        'title': f'The Test Serial, Part {i}',
        'body': f'This is **part {i}** of the serial.\n\nThe hero keeps walking.',
    })


def post_url(post: dict) -> str:
    return f"{BASE_URL}/r/{SUBREDDIT}/comments/{post['id']}/{post['slug']}/"


def build_listing(index: int) -> list:
    """生成与论坛 JSON 接口相同结构的两项 listing"""
    post = SERIES[index]
    selftext = post['body']
    if index > 0:
        selftext += f"\n\n[Previous]({post_url(SERIES[index - 1])})"

    comments = [
        {'kind': 't1', 'data': {'id': f"{post['id']}c1", 'author': 'a_reader',
                                 'body': 'Great chapter! [next](https://example.com/not-a-chapter)'}},
        {'kind': 't1', 'data': {'id': f"{post['id']}c2", 'author': AUTHOR,
                                 'body': f'Author note for part {index + 1}.'}},
    ]
    if index + 1 < len(SERIES):
        comments.append({'kind': 't1', 'data': {
            'id': f"{post['id']}c3",
            'author': AUTHOR,
            'body': f"[Next part]({post_url(SERIES[index + 1])})",
        }})
    comments.append({'kind': 'more', 'data': {'count': 3, 'children': ['x1', 'x2', 'x3']}})

    return [
        {'kind': 'Listing', 'data': {'children': [{'kind': 't3', 'data': {
            'id': post['id'],
            'author': AUTHOR,
            'title': post['title'],
            'selftext': selftext,
            'subreddit': SUBREDDIT,
        }}]}},
        {'kind': 'Listing', 'data': {'children': comments}},
    ]


@app.route('/')
def index():
    """连载目录"""
    return jsonify({'series': [post_url(post) for post in SERIES]})


@app.route('/r/<subreddit>/comments/<post_id>/<slug>/.json')
def thread(subreddit, post_id, slug):
    """帖子 JSON 接口"""
    if subreddit != SUBREDDIT:
        abort(404)
    for index, post in enumerate(SERIES):
        if post['id'] == post_id:
            return jsonify(build_listing(index))
    abort(404)


if __name__ == '__main__':
    print("🚀 启动测试服务器...")
    print(f"📍 访问地址：{BASE_URL}")
    print("📚 连载篇数：", len(SERIES))
    print(f"🧪 起始帖子：{post_url(SERIES[0])}")
    print("-" * 50)

    app.run(debug=True, host='0.0.0.0', port=8080)
