"""
Response serializers — GenerateResponse → JSON-able dict / TSV 文本。

只负责「输出格式化」，不做任何解析或校验。
"""

import csv
import io
from datetime import date


def serialize_support_item(item):
    return item.to_dict()


def serialize_generate_response(result):
    """200 响应：{"supportItems": [...]}，保持 LLM 返回的顺序。"""
    return {
        'supportItems': [serialize_support_item(item) for item in result.support_items],
    }


def serialize_support_plan_tsv(result):
    """
    Excel 粘贴用的 TSV：每项一行，列为 title / goal / userRole / supportContent。

    title 为空时写「項目N」。字段内含换行或 tab 时按 CSV 规则加引号。
    """
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter='\t', lineterminator='\n')
    for position, item in enumerate(result.support_items, start=1):
        writer.writerow([
            item.export_title(position),
            item.goal,
            item.user_role,
            item.support_content,
        ])
    return buf.getvalue()


def support_plan_filename(today=None):
    today = today or date.today()
    return f"support_plan_{today.strftime('%Y%m%d')}.tsv"
