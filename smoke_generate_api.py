#!/usr/bin/env python3
"""
对本地运行中的服务发一次生成请求，打印结果。

使用方法:
1. 设置 OPENAI_API_KEY 并启动服务器: python manage.py runserver
2. 安装依赖: pip install -e ".[scripts]"
3. 运行此脚本: python smoke_generate_api.py [面談記録テキストファイル]
"""

import sys

import requests

# API配置
BASE_URL = "http://localhost:8000/api"

SAMPLE_RECORD = (
    "利用者さんは毎日通所したいと話されています。現在は週3回の通所ですが、体力面での不安があります。"
    "作業については軽作業から始めたいとのことです。"
)


def check_health():
    response = requests.get(f"{BASE_URL}/health/", timeout=10)
    response.raise_for_status()
    data = response.json()
    print(f"provider={data['provider']} model={data['model']} contentSafetyCheck={data['contentSafetyCheck']}")


def generate(interview_record):
    print("\n" + "=" * 60)
    print(f"面談記録（{len(interview_record)}文字）を送信します")
    print("=" * 60)

    try:
        response = requests.post(
            f"{BASE_URL}/generate/",
            json={"interviewRecord": interview_record},
            timeout=120,
        )
    except requests.exceptions.ConnectionError:
        print("\n❌ 连接失败! 请确认服务器正在运行 (python manage.py runserver)")
        return False

    print(f"响应状态码: {response.status_code}")
    data = response.json()

    if response.status_code != 200:
        print(f"\n❌ 生成失败: {data.get('error')} (code={data.get('code')})")
        return False

    print(f"\n✅ 生成成功! {len(data['supportItems'])}項目\n")
    for index, item in enumerate(data["supportItems"], start=1):
        print(f"[{index}] {item['title'] or f'項目 {index}'}  ({item['category']})")
        print(f"    到達目標: {item['goal']}")
        print(f"    本人の役割: {item['userRole']}")
        print(f"    支援内容: {item['supportContent']}")
    return True


if __name__ == "__main__":
    if len(sys.argv) > 1:
        with open(sys.argv[1], encoding="utf-8") as f:
            record = f.read()
    else:
        record = SAMPLE_RECORD

    check_health()
    ok = generate(record)
    sys.exit(0 if ok else 1)
