import csv
from pathlib import Path
from typing import List
from .models import AggregatedSlot


RESULT_HEADERS = ["date", "start_time", "end_time", "score", "available_count", "attendees", "absentees"]


def write_results(path: Path, slots: List[AggregatedSlot]) -> None:
    """Export ranked meeting times to CSV for sharing.
    
    Output format:
    date,start_time,end_time,score,available_count,attendees,absentees
    2025-06-11,15:00,18:00,1.00,3,Tanaka; Suzuki; Sato,
    """
    try:
        with open(path, 'w', newline='', encoding='utf-8') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=RESULT_HEADERS)
            writer.writeheader()
            
            for slot in slots:
                writer.writerow({
                    'date': slot.date_str,
                    'start_time': slot.start_time,
                    'end_time': slot.end_time,
                    'score': f"{slot.score:.2f}",
                    'available_count': slot.available_count,
                    'attendees': '; '.join(slot.attendees),
                    'absentees': '; '.join(slot.absentees),
                })
    
    except Exception as e:
        raise ValueError(f"Error writing results file: {e}")
